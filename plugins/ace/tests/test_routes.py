"""Tests for ACE block routes."""
import pytest

from lms.repositories.base import RecordNotFoundError
from plugins.ace.src.toggle import HIDDEN_GRAPH_PREFERENCE

CONTENT_URL = "/api/v1/plugins/ace/blocks/{}/content"


class TestBlockContentAccess:
    """Authentication and plugin state."""

    def test_requires_authentication(self, client, platform, add_block, enabled_ace):
        block_id = add_block(platform.course_context_id)

        response = client.get(CONTENT_URL.format(block_id))

        assert response.status_code == 401

    def test_returns_404_when_disabled(self, client, platform, add_block, auth_headers):
        block_id = add_block(platform.course_context_id)

        response = client.get(
            CONTENT_URL.format(block_id), headers=auth_headers(platform.student_id)
        )

        assert response.status_code == 404
        assert response.get_json()["error"] == "ACE plugin not enabled"

    def test_unknown_block_renders_nothing(self, client, platform, enabled_ace, auth_headers):
        response = client.get(
            CONTENT_URL.format(9999), headers=auth_headers(platform.student_id)
        )

        assert response.status_code == 200
        assert response.get_json()["text"] == ""

    def test_unknown_page_context_returns_404(self, client, platform, add_block, enabled_ace, auth_headers):
        block_id = add_block(platform.course_context_id)

        response = client.get(
            CONTENT_URL.format(block_id),
            query_string={"pagecontextid": 9999},
            headers=auth_headers(platform.student_id),
        )

        assert response.status_code == 404


class TestStudentBlock:
    """Student graph rendered through the API."""

    def test_student_sees_own_graph(self, client, platform, add_block, enabled_ace, auth_headers, graphs):
        block_id = add_block(platform.course_context_id, "student")

        response = client.get(
            CONTENT_URL.format(block_id), headers=auth_headers(platform.student_id)
        )

        assert response.status_code == 200
        data = response.get_json()
        assert data["title"] == "ACE Engagement analytics"
        assert "<svg>student</svg>" in data["text"]
        assert data["toggle"]["hidden"] is False
        assert "/api/v1/plugins/ace/static/graph.svg" in data["text"]
        graphs.student_graph.assert_called_once_with(platform.student_id, 0, False)

    def test_student_cannot_see_other_student(self, client, platform, add_block, enabled_ace, auth_headers, graphs):
        block_id = add_block(platform.course_context_id, "student")

        response = client.get(
            CONTENT_URL.format(block_id),
            query_string={"contextid": platform.other_context_id},
            headers=auth_headers(platform.student_id),
        )

        assert response.status_code == 200
        assert response.get_json()["text"] == ""
        graphs.student_graph.assert_not_called()

    def test_teacher_sees_student_in_course(self, client, platform, add_block, enabled_ace, auth_headers, graphs):
        block_id = add_block(platform.course_context_id, "student")

        response = client.get(
            CONTENT_URL.format(block_id),
            query_string={"contextid": platform.student_context_id},
            headers=auth_headers(platform.teacher_id),
        )

        assert response.status_code == 200
        assert 'href="/local/ace/teacher"' in response.get_json()["text"]
        graphs.student_graph.assert_called_once_with(platform.student_id, 0, False)

    def test_missing_requested_user_raises(self, app, client, platform, add_block, enabled_ace, auth_headers):
        from lms.models import ContextLevel

        contexts = app.container.context_repository()
        orphan = contexts.create(ContextLevel.USER, 4242, contexts.system())
        block_id = add_block(platform.course_context_id, "student")

        with pytest.raises(RecordNotFoundError):
            client.get(
                CONTENT_URL.format(block_id),
                query_string={"contextid": orphan.id},
                headers=auth_headers(platform.student_id),
            )

    def test_toggle_preference_round_trip(self, client, platform, add_block, enabled_ace, auth_headers):
        block_id = add_block(platform.course_context_id, "student")
        headers = auth_headers(platform.student_id)

        first = client.get(CONTENT_URL.format(block_id), headers=headers).get_json()
        assert first["toggle"]["label"] == "Switch to static image"

        response = client.post(
            "/api/v1/user/preferences",
            json={"name": HIDDEN_GRAPH_PREFERENCE, "value": True},
            headers=headers,
        )
        assert response.status_code == 200
        assert response.get_json()["value"] == "1"

        second = client.get(CONTENT_URL.format(block_id), headers=headers).get_json()
        assert second["toggle"]["hidden"] is True
        assert second["toggle"]["label"] == "Switch to live graph"
        assert 'style="display: none" id="block_ace-live"' in second["text"]


class TestCourseAndActivityBlocks:
    """Teacher-facing modes."""

    def test_student_gets_nothing_from_course_block(self, client, platform, add_block, enabled_ace, auth_headers, graphs):
        block_id = add_block(platform.course_context_id, "course")

        response = client.get(
            CONTENT_URL.format(block_id), headers=auth_headers(platform.student_id)
        )

        assert response.get_json()["text"] == ""
        graphs.course_graph.assert_not_called()

    def test_teacher_sees_course_graph(self, client, platform, add_block, enabled_ace, auth_headers, graphs):
        block_id = add_block(platform.course_context_id, "course")

        response = client.get(
            CONTENT_URL.format(block_id), headers=auth_headers(platform.teacher_id)
        )

        data = response.get_json()
        assert '<div class="teachergraph"><svg>course</svg></div>' in data["text"]
        assert data["help_text"].startswith("Analytics for Course Engagement")
        graphs.course_graph.assert_called_once_with(platform.course_id)

    def test_course_block_outside_course_renders_nothing(self, client, platform, add_block, enabled_ace, auth_headers, graphs):
        block_id = add_block(platform.system_context_id, "course")

        response = client.get(
            CONTENT_URL.format(block_id), headers=auth_headers(platform.teacher_id)
        )

        assert response.get_json()["text"] == ""
        graphs.course_graph.assert_not_called()

    def test_teacher_sees_activity_graph(self, client, platform, add_block, enabled_ace, auth_headers, graphs):
        block_id = add_block(platform.module_context_id, "activity")

        response = client.get(
            CONTENT_URL.format(block_id), headers=auth_headers(platform.teacher_id)
        )

        assert response.status_code == 200
        graphs.course_module_engagement_graph.assert_called_once_with(platform.cmid)

    def test_course_parameter_reaches_tabs_graph(self, client, platform, add_block, enabled_ace, auth_headers, graphs):
        block_id = add_block(platform.course_context_id, "studentwithtabs")

        client.get(
            CONTENT_URL.format(block_id),
            query_string={"course": platform.course_id},
            headers=auth_headers(platform.student_id),
        )

        graphs.student_full_graph.assert_called_once_with(
            platform.student_id, platform.course_id
        )


class TestStaticAssets:
    """Bundled files served by the blueprint."""

    def test_graph_image_served(self, client, enabled_ace):
        response = client.get("/api/v1/plugins/ace/static/graph.svg")

        assert response.status_code == 200
        response.close()


class TestToggleAcrossWorkers:
    """Toggle writes handled by a process that did not render the block."""

    def test_write_accepted_by_other_worker(self, client, second_worker, platform, add_block, enabled_ace, auth_headers):
        block_id = add_block(platform.course_context_id, "student")
        headers = auth_headers(platform.student_id)
        client.get(CONTENT_URL.format(block_id), headers=headers)

        response = second_worker.test_client().post(
            "/api/v1/user/preferences",
            json={"name": HIDDEN_GRAPH_PREFERENCE, "value": True},
            headers=headers,
        )

        assert response.status_code == 200
        rendered = client.get(CONTENT_URL.format(block_id), headers=headers).get_json()
        assert rendered["toggle"]["hidden"] is True

    def test_grant_belongs_to_rendering_user(self, client, second_worker, platform, add_block, enabled_ace, auth_headers):
        block_id = add_block(platform.course_context_id, "student")
        client.get(CONTENT_URL.format(block_id), headers=auth_headers(platform.student_id))

        response = second_worker.test_client().post(
            "/api/v1/user/preferences",
            json={"name": HIDDEN_GRAPH_PREFERENCE, "value": True},
            headers=auth_headers(platform.other_student_id),
        )

        assert response.status_code == 403
