from __future__ import annotations

import argparse
import logging
import os
import sys
from collections.abc import Sequence
from pathlib import Path

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.logging import TextualHandler
from textual.screen import ModalScreen
from textual.widgets import Button, DataTable, Label, Static

if __package__ in (None, ""):
    sys.path.append(str(Path(__file__).resolve().parents[1]))
    from ec2_dash.aws_api import ConfigError, Ec2InventoryClient, ProviderError
    from ec2_dash.models import COLUMNS, InstanceRecord, state_color
    from ec2_dash.state import DashboardEvent, DashboardMode, transition
else:
    from .aws_api import ConfigError, Ec2InventoryClient, ProviderError
    from .models import COLUMNS, InstanceRecord, state_color
    from .state import DashboardEvent, DashboardMode, transition

logger = logging.getLogger(__name__)

LOG_LEVEL_ENV = "EC2_DASH_LOG_LEVEL"


class MessageScreen(ModalScreen[None]):
    BINDINGS = [Binding("escape", "acknowledge", "OK")]

    def __init__(self, message: str) -> None:
        super().__init__()
        self.message = message

    def compose(self) -> ComposeResult:
        with Vertical(id="message-modal"):
            yield Label(self.message, markup=False, id="message-text")
            yield Button("OK", variant="primary", id="message-ok")

    def on_mount(self) -> None:
        self.query_one("#message-ok", Button).focus()

    def action_acknowledge(self) -> None:
        self.dismiss(None)

    async def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "message-ok":
            self.dismiss(None)


class Ec2DashApp(App[None]):
    CSS_PATH = "styles.tcss"
    TITLE = "EC2 Dashboard"
    BINDINGS = [
        Binding("s", "start", "Start"),
        Binding("t", "stop", "Stop"),
        Binding("r", "refresh", "Refresh"),
        Binding("q", "quit", "Quit"),
    ]

    def __init__(
        self,
        inventory: Ec2InventoryClient,
        *,
        profile: str = "default",
        instances: Sequence[InstanceRecord] = (),
    ) -> None:
        super().__init__()
        self.inventory = inventory
        self.profile = profile
        self.instances: list[InstanceRecord] = list(instances)
        self.mode = DashboardMode.TABLE

    def compose(self) -> ComposeResult:
        yield DataTable(id="instance-table")
        yield Static(
            f"[Profile: {self.profile}]  Keys: [s] Start  [t] Stop  [r] Refresh  [q] Quit",
            markup=False,
            id="help",
        )

    def on_mount(self) -> None:
        table = self.query_one("#instance-table", DataTable)
        table.cursor_type = "row"
        table.add_columns(*COLUMNS)
        self._render_instances()
        self.set_focus(table)

    def action_start(self) -> None:
        if self.mode is not DashboardMode.TABLE:
            return
        instance = self._selected_instance()
        if instance is None:
            return
        try:
            self.inventory.start_instance(instance.instance_id)
        except ProviderError as error:
            self.show_message(f"Error starting instance: {error}")
            return
        self.show_message(f"Starting instance: {instance.instance_id}")

    def action_stop(self) -> None:
        if self.mode is not DashboardMode.TABLE:
            return
        instance = self._selected_instance()
        if instance is None:
            return
        try:
            self.inventory.stop_instance(instance.instance_id)
        except ProviderError as error:
            self.show_message(f"Error stopping instance: {error}")
            return
        self.show_message(f"Stopping instance: {instance.instance_id}")

    def action_refresh(self) -> None:
        if self.mode is not DashboardMode.TABLE:
            return
        try:
            instances = self.inventory.list_instances()
        except ProviderError as error:
            self.show_message(f"Error refreshing: {error}")
            return
        self.instances = instances
        self._render_instances(keep_cursor=True)
        self.show_message(f"Loaded {len(instances)} instances.")

    async def action_quit(self) -> None:
        if self.mode is not DashboardMode.TABLE:
            return
        self.mode = transition(self.mode, DashboardEvent.QUIT)
        self.exit()

    def show_message(self, message: str) -> None:
        logger.info(message)
        self.mode = transition(self.mode, DashboardEvent.OUTCOME)
        self.push_screen(MessageScreen(message), callback=self._on_message_dismissed)

    def _on_message_dismissed(self, _: None) -> None:
        self.mode = transition(self.mode, DashboardEvent.ACKNOWLEDGE)
        self.set_focus(self.query_one("#instance-table", DataTable))

    def _selected_instance(self) -> InstanceRecord | None:
        table = self.query_one("#instance-table", DataTable)
        try:
            row = table.cursor_row
            if row < 0:
                raise IndexError
            return self.instances[row]
        except IndexError:
            return None

    def _render_instances(self, *, keep_cursor: bool = False) -> None:
        table = self.query_one("#instance-table", DataTable)
        row = table.cursor_row if keep_cursor else 0
        table.clear(columns=False)
        for instance in self.instances:
            *cells, state = instance.display_cells()
            table.add_row(*cells, Text(state, style=state_color(state) or ""))
        if self.instances:
            table.move_cursor(row=min(max(row, 0), len(self.instances) - 1), column=0)


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="EC2 instance dashboard")
    parser.add_argument(
        "--profile",
        default=None,
        help="AWS profile name (defaults to AWS_PROFILE or the default profile)",
    )
    return parser.parse_args(argv)


def configure_logging() -> None:
    level = getattr(logging, os.environ.get(LOG_LEVEL_ENV, "WARNING").upper(), None)
    if not isinstance(level, int):
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(name)s: %(message)s",
        handlers=[TextualHandler()],
    )


def main(argv: Sequence[str] | None = None) -> None:
    args = parse_args(argv)
    configure_logging()
    try:
        inventory = Ec2InventoryClient.from_profile(args.profile)
    except ConfigError as error:
        logger.error("Failed to create EC2 client: %s", error)
        raise SystemExit(1) from error
    try:
        instances = inventory.list_instances()
    except ProviderError as error:
        logger.error("Failed to load instances: %s", error)
        raise SystemExit(1) from error

    app = Ec2DashApp(inventory, profile=inventory.profile, instances=instances)
    try:
        app.run()
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
