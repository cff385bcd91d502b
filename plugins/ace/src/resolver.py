"""Widget content resolver for the ACE block.

Decides, for one render of one block instance, whether the viewer may see
anything, whose data to show, which graph to fetch and how to compose it
with the title and help popover.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from markupsafe import Markup

from lms.models import ContextLevel, ParamType
from plugins.ace.src.graph_client import GraphProvider
from plugins.ace.src.modes import GraphMode, GRAPH_TYPE_SETTING
from plugins.ace.src.toggle import GraphToggle, HIDDEN_GRAPH_PREFERENCE
from plugins.ace.src import rendering

logger = logging.getLogger(__name__)

COMPONENT = "ace"

CAP_VIEW = "ace.view"
CAP_VIEW_OWN = "ace.viewown"


@dataclass
class WidgetConfig:
    """Per-instance block settings."""

    mode: Optional[GraphMode]

    @classmethod
    def from_instance_config(cls, config: Optional[Dict[str, Any]]) -> "WidgetConfig":
        return cls(mode=GraphMode.from_setting((config or {}).get(GRAPH_TYPE_SETTING)))


@dataclass
class ViewerContext:
    """
    Who is looking, and at which page.

    ``requested_context_id`` and ``requested_course_id`` come from the
    ``contextid`` and ``course`` request parameters (0 when absent).
    """

    user_id: int
    page_context: Any
    course_id: int
    requested_context_id: int = 0
    requested_course_id: int = 0


@dataclass
class AceSettings:
    """Plugin-wide settings the resolver needs."""

    teacher_dashboard_url: str
    user_dashboard_url: str
    graph_image_url: str
    site_course_id: int = 1


@dataclass
class GraphBody:
    """Markup produced by a mode handler, with the switch it declares if any."""

    markup: Markup
    toggle: Optional[GraphToggle] = None


@dataclass
class WidgetOutput:
    """Block content handed to the host template layer."""

    title: str = ""
    help_text: str = ""
    body: Markup = field(default_factory=Markup)
    text: Markup = field(default_factory=Markup)
    items: List[str] = field(default_factory=list)
    icons: List[str] = field(default_factory=list)
    footer: str = ""
    toggle: Optional[GraphToggle] = None

    @property
    def is_empty(self) -> bool:
        return not self.text

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "help_text": self.help_text,
            "text": str(self.text),
            "items": list(self.items),
            "icons": list(self.icons),
            "footer": self.footer,
            "toggle": self.toggle.to_dict() if self.toggle else None,
        }


class WidgetContentResolver:
    """
    Resolves block content for each graph mode.

    Collaborators are injected: capability checks, graph provider,
    preference store, string lookup, context and user lookups.
    """

    def __init__(
        self,
        capability_service,
        graph_provider: GraphProvider,
        preference_service,
        string_service,
        context_repository,
        user_repository,
        settings: AceSettings,
    ):
        self.capabilities = capability_service
        self.graphs = graph_provider
        self.preferences = preference_service
        self.strings = string_service
        self.contexts = context_repository
        self.users = user_repository
        self.settings = settings

        self._handlers: Dict[GraphMode, Callable[[ViewerContext], Optional[GraphBody]]] = {
            GraphMode.STUDENT: self._student,
            GraphMode.COURSE: self._course,
            GraphMode.STUDENT_WITH_TABS: self._student_with_tabs,
            GraphMode.TEACHER_COURSE: self._teacher_course,
            GraphMode.ACTIVITY: self._activity,
            GraphMode.STUDENT_TEACHER_AUTO: self._student_teacher_auto,
        }

    def resolve_content(self, config: WidgetConfig, viewer: ViewerContext) -> WidgetOutput:
        """
        Build the block content for one render.

        Returns an empty output when the mode is unknown or the viewer
        may not see the graph; errors from the graph provider or from
        user lookups propagate.
        """
        if config.mode is None:
            return WidgetOutput()

        body = self._handlers[config.mode](viewer)
        if body is None:
            logger.debug(
                f"ACE {config.mode.value} graph hidden from user {viewer.user_id}"
            )
            return WidgetOutput()

        return self._compose(config.mode, body)

    def _compose(self, mode: GraphMode, body: GraphBody) -> WidgetOutput:
        title = self._string("pluginname")
        help_text = self._string(mode.help_string_key)
        text = rendering.render_heading(title, help_text) + body.markup
        if body.toggle is not None:
            text += rendering.render_toggle_script(body.toggle)
        return WidgetOutput(
            title=title,
            help_text=help_text,
            body=body.markup,
            text=text,
            toggle=body.toggle,
        )

    def _string(self, key: str) -> str:
        return self.strings.get_string(key, COMPONENT)

    def _can(self, viewer: ViewerContext, capability: str, context) -> bool:
        return self.capabilities.has_capability(viewer.user_id, capability, context)

    def resolve_target_user(self, viewer: ViewerContext) -> int:
        """
        Whose data to show.

        The user of the requested context when it is a user context,
        otherwise the viewer. A user context pointing at a missing user
        raises RecordNotFoundError.
        """
        context = self.contexts.instance_by_id(viewer.requested_context_id)
        if context is not None and context.contextlevel == ContextLevel.USER:
            return self.users.get_required(context.instanceid).id
        return viewer.user_id

    def _may_view_user(self, viewer: ViewerContext, target_user_id: int) -> bool:
        """viewown always; view as well when looking at someone else."""
        page = viewer.page_context
        if not self._can(viewer, CAP_VIEW_OWN, page):
            return False
        if target_user_id != viewer.user_id and not self._can(viewer, CAP_VIEW, page):
            return False
        return True

    def _student(self, viewer: ViewerContext) -> Optional[GraphBody]:
        target = self.resolve_target_user(viewer)
        if not self._may_view_user(viewer, target):
            return None

        graph = self.graphs.student_graph(target, 0, False)
        if self._can(viewer, CAP_VIEW, viewer.page_context):
            url = self.settings.teacher_dashboard_url
        else:
            url = self.settings.user_dashboard_url
        link_text = self._string("viewyourdashboard")

        if graph == "":
            return GraphBody(
                rendering.render_dashboard_link(
                    url, self.settings.graph_image_url, link_text
                )
            )

        hidden = self.preferences.get_bool(viewer.user_id, HIDDEN_GRAPH_PREFERENCE, False)
        toggle = GraphToggle(
            hidden=hidden,
            live_label=self._string("switchtolivegraph"),
            static_label=self._string("switchtostaticimage"),
        )
        self.preferences.allow_ajax_update(
            viewer.user_id, HIDDEN_GRAPH_PREFERENCE, ParamType.BOOL
        )
        markup = rendering.render_student_graph(
            graph, toggle, url, self.settings.graph_image_url, link_text
        )
        return GraphBody(markup, toggle)

    def _course(self, viewer: ViewerContext) -> Optional[GraphBody]:
        if viewer.course_id == self.settings.site_course_id:
            return None
        course_context = self.contexts.course(viewer.course_id)
        if not self._can(viewer, CAP_VIEW, course_context):
            return None
        return GraphBody(
            rendering.render_teacher_graph(self.graphs.course_graph(viewer.course_id))
        )

    def _student_with_tabs(self, viewer: ViewerContext) -> Optional[GraphBody]:
        target = self.resolve_target_user(viewer)
        if not self._may_view_user(viewer, target):
            return None
        graph = self.graphs.student_full_graph(target, viewer.requested_course_id)
        return GraphBody(Markup(graph))

    def _teacher_course(self, viewer: ViewerContext) -> Optional[GraphBody]:
        if not self._can(viewer, CAP_VIEW_OWN, viewer.page_context):
            return None
        return GraphBody(Markup(self.graphs.teacher_course_graph(viewer.user_id)))

    def _activity(self, viewer: ViewerContext) -> Optional[GraphBody]:
        page = viewer.page_context
        if not self._can(viewer, CAP_VIEW, page):
            return None
        graph = self.graphs.course_module_engagement_graph(page.instanceid)
        return GraphBody(Markup(graph))

    def _student_teacher_auto(self, viewer: ViewerContext) -> Optional[GraphBody]:
        page = viewer.page_context
        course_id = viewer.requested_course_id
        target = self.resolve_target_user(viewer)
        on_user_page = page is not None and page.contextlevel == ContextLevel.USER

        if on_user_page and target != viewer.user_id and self._can(viewer, CAP_VIEW, page):
            return GraphBody(Markup(self.graphs.student_full_graph(target, course_id)))
        if (
            on_user_page
            and target == viewer.user_id
            and self._can(viewer, CAP_VIEW, self.contexts.system())
        ):
            return GraphBody(Markup(self.graphs.teacher_course_graph(viewer.user_id)))
        # Falls back to the viewer's own graph, not the requested user's.
        if self._can(viewer, CAP_VIEW_OWN, page):
            return GraphBody(Markup(self.graphs.student_full_graph(viewer.user_id, course_id)))
        return None
