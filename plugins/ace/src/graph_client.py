"""Graph providers: HTTP client for the engagement analytics service."""
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import requests

logger = logging.getLogger(__name__)

NO_DATA = ""


class GraphServiceError(Exception):
    """Raised when the analytics service cannot produce a graph."""
    pass


class GraphProvider(ABC):
    """
    Source of rendered engagement graphs.

    Every method returns an HTML fragment, or an empty string when there
    is no data to show.
    """

    @abstractmethod
    def student_graph(self, user_id: int, course_id: int = 0, show_x_titles: bool = True) -> str:
        ...

    @abstractmethod
    def course_graph(self, course_id: int) -> str:
        ...

    @abstractmethod
    def student_full_graph(self, user_id: int, course_id: int = 0) -> str:
        """Per-user graph with one tab per enrolled course."""
        ...

    @abstractmethod
    def teacher_course_graph(self, user_id: int) -> str:
        """Engagement across the courses a teacher teaches."""
        ...

    @abstractmethod
    def course_module_engagement_graph(self, cmid: int) -> str:
        ...


class AnalyticsGraphClient(GraphProvider):
    """GraphProvider backed by the analytics service's HTTP API."""

    def __init__(
        self,
        api_endpoint: str,
        api_key: str = "",
        timeout: int = 10,
        session: Optional[requests.Session] = None,
    ):
        self.api_endpoint = (api_endpoint or "").rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self._session = session or requests.Session()

    def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> str:
        """
        Fetch a graph fragment.

        Returns:
            The fragment, or "" when the service reports no data (204 or
            an empty body).

        Raises:
            GraphServiceError: If the service is not configured, unreachable
                or answers with an error status.
        """
        if not self.api_endpoint:
            raise GraphServiceError("Analytics API endpoint is not configured")

        headers = {"Accept": "text/html"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"

        url = f"{self.api_endpoint}{path}"
        try:
            response = self._session.get(
                url, params=params, headers=headers, timeout=self.timeout
            )
        except requests.Timeout:
            logger.error(f"Analytics service timed out: {url}")
            raise GraphServiceError("Analytics service request timed out")
        except requests.RequestException as e:
            logger.error(f"Analytics service request failed: {e}")
            raise GraphServiceError(f"Analytics service request failed: {e}")

        if response.status_code == 204:
            return NO_DATA
        if response.status_code >= 400:
            logger.error(
                f"Analytics service returned {response.status_code} for {url}"
            )
            raise GraphServiceError(
                f"Analytics service returned status {response.status_code}"
            )

        return response.text.strip()

    def student_graph(self, user_id: int, course_id: int = 0, show_x_titles: bool = True) -> str:
        return self._get(
            f"/graphs/students/{user_id}",
            {"course": course_id, "showxtitles": int(show_x_titles)},
        )

    def course_graph(self, course_id: int) -> str:
        return self._get(f"/graphs/courses/{course_id}")

    def student_full_graph(self, user_id: int, course_id: int = 0) -> str:
        return self._get(f"/graphs/students/{user_id}/full", {"course": course_id})

    def teacher_course_graph(self, user_id: int) -> str:
        return self._get(f"/graphs/teachers/{user_id}/courses")

    def course_module_engagement_graph(self, cmid: int) -> str:
        return self._get(f"/graphs/modules/{cmid}")
