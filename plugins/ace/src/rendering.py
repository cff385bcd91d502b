"""Markup for the ACE block, rendered from Jinja2 templates."""
import os
from jinja2 import Environment, FileSystemLoader
from markupsafe import Markup

from plugins.ace.src.toggle import GraphToggle

TEMPLATE_DIR = os.path.join(os.path.dirname(os.path.dirname(__file__)), "templates")

_env = Environment(loader=FileSystemLoader(TEMPLATE_DIR), autoescape=True)


def _render(template_name: str, **context) -> Markup:
    return Markup(_env.get_template(template_name).render(**context))


def render_heading(title: str, help_text: str = "") -> Markup:
    """Block title, followed by a focus-triggered help popover when help is given."""
    return _render("heading.html", title=title, help_text=help_text)


def render_dashboard_link(url: str, image_url: str, link_text: str) -> Markup:
    """Static graph image and text, both linking to the dashboard."""
    return _render(
        "dashboard_link.html", url=url, image_url=image_url, link_text=link_text
    )


def render_student_graph(
    graph: str, toggle: GraphToggle, url: str, image_url: str, link_text: str
) -> Markup:
    """
    Live graph and static image with the switch control between them.

    ``graph`` comes from the analytics service and is inserted as-is.
    """
    return _render(
        "student_graph.html",
        graph=Markup(graph),
        toggle=toggle,
        url=url,
        image_url=image_url,
        link_text=link_text,
    )


def render_teacher_graph(graph: str) -> Markup:
    return Markup('<div class="teachergraph">{}</div>').format(Markup(graph))


def render_toggle_script(toggle: GraphToggle) -> Markup:
    """Inline script binding the switch control's click to its effects."""
    script = _env.get_template("toggle.js").render(toggle=toggle)
    return Markup("<script>\n{}</script>").format(Markup(script))
