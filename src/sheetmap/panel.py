"""Side panel state machine.

Two states: Closed and Open(label). Opening while open swaps the content
in place; clicking the map background closes the panel. The panel keeps
its last title and body when closed, as the sidebar DOM does.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from loguru import logger

PANEL_ID = "my-info-panel"
DEFAULT_TITLE = "Seleziona un marker"


class PanelStatus(str, Enum):
    CLOSED = "closed"
    OPEN = "open"


@dataclass
class Panel:
    """The single sidebar panel of a map.

    Attributes:
        panel_id: DOM id of the sidebar pane.
        title: Current heading (the selected row's name).
        body: Current content (the selected row's description).
        label: Label of the row the panel is open for, None when closed.
        container: DOM id of the sidebar container.
        position: Side of the map the sidebar docks to.
        tab_icon: Font Awesome classes for the tab button.
        close_button: Whether the sidebar shows a close button.
    """

    panel_id: str = PANEL_ID
    title: str = DEFAULT_TITLE
    body: str = ""
    label: str | None = None
    container: str = "sidebar"
    position: str = "left"
    tab_icon: str = "fa fa-bars"
    close_button: bool = True

    @property
    def status(self) -> PanelStatus:
        return PanelStatus.CLOSED if self.label is None else PanelStatus.OPEN

    @property
    def is_open(self) -> bool:
        return self.label is not None

    def open(self, label: str, title: str, body: str) -> None:
        """Show ``title``/``body`` for ``label``, replacing any open content."""
        previous = self.label
        self.title = title
        self.body = body
        self.label = label
        if previous is None:
            logger.debug(f"Panel {self.panel_id} opened for {label!r}")
        else:
            logger.debug(f"Panel {self.panel_id} switched {previous!r} -> {label!r}")

    def close(self) -> None:
        if self.label is None:
            return
        logger.debug(f"Panel {self.panel_id} closed (was {self.label!r})")
        self.label = None
