"""Test fixtures for ACE plugin tests."""
import os
from dataclasses import dataclass
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

os.environ["FLASK_ENV"] = "testing"
os.environ["TESTING"] = "true"

from lms.models import ContextLevel  # noqa: E402
from lms.repositories.base import RecordNotFoundError  # noqa: E402
from lms.services.string_service import StringService  # noqa: E402
from plugins.ace import PLUGINS_ROOT  # noqa: E402
from plugins.ace.src.graph_client import GraphProvider  # noqa: E402
from plugins.ace.src.resolver import (  # noqa: E402
    AceSettings,
    ViewerContext,
    WidgetContentResolver,
)

VIEWER_ID = 2
OTHER_USER_ID = 4
MISSING_USER_ID = 99
COURSE_ID = 5
CMID = 9
SITE_COURSE_ID = 1


class FakeCapabilities:
    """Grants capabilities per (capability, context id)."""

    def __init__(self):
        self.grants = set()

    def grant(self, capability, *contexts):
        for context in contexts:
            self.grants.add((capability, context.id))

    def has_capability(self, user_id, capability, context):
        if not user_id or context is None:
            return False
        return (capability, context.id) in self.grants


@dataclass
class ContextTree:
    system: SimpleNamespace
    course: SimpleNamespace
    module: SimpleNamespace
    site_course: SimpleNamespace
    viewer_user: SimpleNamespace
    other_user: SimpleNamespace
    missing_user: SimpleNamespace


def _context(id, level, instanceid):
    return SimpleNamespace(id=id, contextlevel=int(level), instanceid=instanceid)


@pytest.fixture
def tree():
    return ContextTree(
        system=_context(1, ContextLevel.SYSTEM, 0),
        site_course=_context(2, ContextLevel.COURSE, SITE_COURSE_ID),
        course=_context(10, ContextLevel.COURSE, COURSE_ID),
        module=_context(11, ContextLevel.MODULE, CMID),
        viewer_user=_context(20, ContextLevel.USER, VIEWER_ID),
        other_user=_context(21, ContextLevel.USER, OTHER_USER_ID),
        missing_user=_context(22, ContextLevel.USER, MISSING_USER_ID),
    )


@pytest.fixture
def capabilities():
    return FakeCapabilities()


@pytest.fixture
def context_repository(tree):
    by_id = {
        c.id: c
        for c in (
            tree.system, tree.site_course, tree.course, tree.module,
            tree.viewer_user, tree.other_user, tree.missing_user,
        )
    }
    repo = MagicMock()
    repo.instance_by_id.side_effect = lambda context_id: by_id.get(context_id) if context_id else None
    repo.system.return_value = tree.system
    repo.course.side_effect = lambda course_id: {
        COURSE_ID: tree.course,
        SITE_COURSE_ID: tree.site_course,
    }.get(course_id)
    return repo


@pytest.fixture
def user_repository():
    def get_required(user_id):
        if user_id in (VIEWER_ID, OTHER_USER_ID):
            return SimpleNamespace(id=user_id)
        raise RecordNotFoundError(f"User with id {user_id} does not exist")

    repo = MagicMock()
    repo.get_required.side_effect = get_required
    return repo


@pytest.fixture
def graphs():
    provider = MagicMock(spec=GraphProvider)
    provider.student_graph.return_value = "<svg>student</svg>"
    provider.course_graph.return_value = "<svg>course</svg>"
    provider.student_full_graph.return_value = "<div>tabs</div>"
    provider.teacher_course_graph.return_value = "<div>teacher</div>"
    provider.course_module_engagement_graph.return_value = "<svg>module</svg>"
    return provider


@pytest.fixture
def preferences():
    service = MagicMock()
    service.get_bool.return_value = False
    return service


@pytest.fixture
def strings():
    return StringService([PLUGINS_ROOT], "en")


@pytest.fixture
def settings():
    return AceSettings(
        teacher_dashboard_url="/local/ace/teacher",
        user_dashboard_url="/local/ace/user",
        graph_image_url="/static/graph.svg",
        site_course_id=SITE_COURSE_ID,
    )


@pytest.fixture
def resolver(
    capabilities, graphs, preferences, strings, context_repository, user_repository, settings
):
    return WidgetContentResolver(
        capability_service=capabilities,
        graph_provider=graphs,
        preference_service=preferences,
        string_service=strings,
        context_repository=context_repository,
        user_repository=user_repository,
        settings=settings,
    )


@pytest.fixture
def make_viewer(tree):
    """ViewerContext factory; defaults to the viewer on the course page."""

    def factory(page=None, course_id=COURSE_ID, contextid=0, course=0, user_id=VIEWER_ID):
        return ViewerContext(
            user_id=user_id,
            page_context=page if page is not None else tree.course,
            course_id=course_id,
            requested_context_id=contextid,
            requested_course_id=course,
        )

    return factory


# ---------------------------------------------------------------------------
# Application fixtures for route tests
# ---------------------------------------------------------------------------


@pytest.fixture
def app_config(tmp_path):
    """Config shared by every app instance of one test."""
    return {
        "TESTING": True,
        "SQLALCHEMY_DATABASE_URI": f"sqlite:///{tmp_path / 'ace.db'}",
        "SQLALCHEMY_ENGINE_OPTIONS": {},
        "RATELIMIT_ENABLED": False,
        "RATELIMIT_STORAGE_URI": "memory://",
        "JWT_SECRET_KEY": "ace-test-jwt-secret-key-0123456789abcdef",
        "PLUGINS_DIR": str(tmp_path / "plugin-state"),
    }


@pytest.fixture
def app(app_config):
    """Create application for testing with an empty sqlite database."""
    from lms.app import create_app
    from lms.extensions import db

    app = create_app(dict(app_config))

    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture
def second_worker(app, app_config):
    """Another app process over the same database and plugin state."""
    from lms.app import create_app

    return create_app(dict(app_config))


@dataclass
class Platform:
    """Ids of the seeded records."""

    system_context_id: int
    course_context_id: int
    module_context_id: int
    student_id: int
    teacher_id: int
    other_student_id: int
    student_context_id: int
    other_context_id: int
    course_id: int = COURSE_ID
    cmid: int = CMID


@pytest.fixture
def platform(app):
    """
    Users, contexts and roles of one course.

    Every user holds ``user`` (ace.viewown) at system level; the student
    holds ``student`` and the teacher ``teacher`` in the course.
    """
    from lms.extensions import db
    from lms.models import Permission, Role, User

    contexts = app.container.context_repository()
    roles = app.container.role_repository()

    view = Permission(name="ace.view", resource="ace", action="view")
    view_own = Permission(name="ace.viewown", resource="ace", action="viewown")
    db.session.add_all([
        Role(name="user", permissions=[view_own]),
        Role(name="student", permissions=[view_own]),
        Role(name="teacher", permissions=[view, view_own]),
    ])

    student = User(username="student", email="student@example.com")
    teacher = User(username="teacher", email="teacher@example.com")
    other = User(username="other", email="other@example.com")
    db.session.add_all([student, teacher, other])
    db.session.commit()

    system = contexts.create(ContextLevel.SYSTEM, 0)
    course = contexts.create(ContextLevel.COURSE, COURSE_ID, system)
    module = contexts.create(ContextLevel.MODULE, CMID, course)
    student_context = contexts.create(ContextLevel.USER, student.id, system)
    contexts.create(ContextLevel.USER, teacher.id, system)
    other_context = contexts.create(ContextLevel.USER, other.id, system)

    for user in (student, teacher, other):
        roles.assign_role(user.id, "user", system.id)
    roles.assign_role(student.id, "student", course.id)
    roles.assign_role(other.id, "student", course.id)
    roles.assign_role(teacher.id, "teacher", course.id)

    return Platform(
        system_context_id=system.id,
        course_context_id=course.id,
        module_context_id=module.id,
        student_id=student.id,
        teacher_id=teacher.id,
        other_student_id=other.id,
        student_context_id=student_context.id,
        other_context_id=other_context.id,
    )


@pytest.fixture
def add_block(app):
    """Place an ACE block with the given graph type in a context."""

    def factory(context_id, graphtype="student"):
        instance = app.container.block_instance_repository().create(
            "ace", context_id, {"graphtype": graphtype}
        )
        return instance.id

    return factory


@pytest.fixture
def auth_headers(app):
    """Bearer headers for a user."""
    from flask_jwt_extended import create_access_token

    def factory(user_id):
        token = create_access_token(identity=str(user_id))
        return {"Authorization": f"Bearer {token}"}

    return factory


@pytest.fixture
def enabled_ace(app, mocker, graphs):
    """Enable the ACE plugin and route its graph calls to the mock provider."""
    from plugins.ace import AcePlugin

    app.plugin_manager.enable_plugin("ace")
    mocker.patch.object(AcePlugin, "build_graph_provider", return_value=graphs)
    return app.plugin_manager.get_plugin("ace")
