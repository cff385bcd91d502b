"""Live graph / static image switch.

The switch is declared as data: which element ids flip, which preference
is written and which labels the control shows. The browser script is
rendered from this declaration, and the same declaration computes the
effects of a click so they can be checked without a DOM.
"""
from dataclasses import asdict, dataclass, replace
from typing import Tuple

HIDDEN_GRAPH_PREFERENCE = "block_ace_student_hidden_graph"
PREFERENCE_ENDPOINT = "/api/v1/user/preferences"

LIVE_GRAPH_ID = "block_ace-live"
STATIC_IMAGE_ID = "block_ace-static"
SWITCH_CONTROL_ID = "block_ace-switchgraph"


@dataclass(frozen=True)
class ToggleEffects:
    """What one click on the switch does."""

    show_id: str
    hide_id: str
    preference: str
    preference_value: bool
    label: str


@dataclass(frozen=True)
class GraphToggle:
    """
    State of the switch between the live graph and the static image.

    ``hidden`` is the persisted preference: True means the live graph is
    hidden and the static image shown.
    """

    hidden: bool
    live_label: str
    static_label: str
    preference: str = HIDDEN_GRAPH_PREFERENCE
    preference_endpoint: str = PREFERENCE_ENDPOINT
    control_id: str = SWITCH_CONTROL_ID
    live_id: str = LIVE_GRAPH_ID
    static_id: str = STATIC_IMAGE_ID

    @property
    def label(self) -> str:
        """Control text: the action opposite to what is shown now."""
        return self.live_label if self.hidden else self.static_label

    @property
    def visible_id(self) -> str:
        return self.static_id if self.hidden else self.live_id

    @property
    def hidden_id(self) -> str:
        return self.live_id if self.hidden else self.static_id

    def activate(self) -> Tuple["GraphToggle", ToggleEffects]:
        """
        Apply one click.

        Returns:
            The switch after the click and the effects the browser performs:
            flip both elements, write the new preference value (fire and
            forget) and relabel the control.
        """
        flipped = replace(self, hidden=not self.hidden)
        effects = ToggleEffects(
            show_id=flipped.visible_id,
            hide_id=flipped.hidden_id,
            preference=self.preference,
            preference_value=flipped.hidden,
            label=flipped.label,
        )
        return flipped, effects

    def to_dict(self) -> dict:
        data = asdict(self)
        data["label"] = self.label
        return data
