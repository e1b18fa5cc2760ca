"""Interactive device selection and analysis loop."""

import re

from emmcctl.core.config import Config
from emmcctl.core.context import Context
from emmcctl.core.logging import SessionLogger
from emmcctl.core.output import Output
from emmcctl.core.style import LABEL, PlainStyle
from emmcctl.emmc.analyzer import analyze_device
from emmcctl.emmc.discovery import discover_devices
from emmcctl.emmc.errors import AnalysisError
from emmcctl.emmc.models import Device
from emmcctl.emmc.report import render_report, report_to_dict

# Session states
SCANNING = "scanning"
LISTING = "listing"
AWAITING_CHOICE = "awaiting_choice"
ANALYZING = "analyzing"
EXITING = "exiting"

EXIT_MESSAGE = "eMMC Lifetime Analyzer exited."

SELECTION_PATTERN = re.compile(r"^[0-9]+$")


def parse_selection(text: str, device_count: int) -> int | None:
    """
    Validate a menu choice.

    Returns:
        0 to exit, 1..device_count for a device, or None if invalid
    """
    choice = "".join(text.split())
    if not SELECTION_PATTERN.match(choice):
        return None
    value = int(choice)
    if value > device_count:
        return None
    return value


class Session:
    """
    Drives scan -> list -> choose -> analyze until the user exits.

    Every analysis is independent; the device list is rebuilt after
    each one so removed or newly inserted cards are picked up.
    """

    def __init__(
        self,
        context: Context,
        output: Output,
        config: Config | None = None,
        logger: SessionLogger | None = None,
        report_style: PlainStyle | None = None,
        report_format: str = "plain",
    ):
        self.context = context
        self.output = output
        self.config = config or Config()
        self.logger = logger or SessionLogger(enabled=False)
        self.report_style = report_style or PlainStyle()
        self.report_format = report_format
        self.state = SCANNING
        self.devices: list[Device] = []
        self.selected: Device | None = None
        self.analyses_completed = 0
        self.analyses_failed = 0

    def run(self) -> int:
        """
        Run until the user exits, input ends, or Ctrl-C.

        Returns:
            Exit code, always 0
        """
        handlers = {
            SCANNING: self._scan,
            LISTING: self._list,
            AWAITING_CHOICE: self._await_choice,
            ANALYZING: self._analyze,
        }

        try:
            while self.state != EXITING:
                self.state = handlers[self.state]()
        except KeyboardInterrupt:
            self.output.newline()
            self.logger.info("Session interrupted", state=self.state)
            self.state = EXITING

        self.finish()
        return 0

    def finish(self) -> None:
        """Print the exit message and log the outcome of the last analysis."""
        self.output.newline()
        self.output.success(EXIT_MESSAGE)
        self.output.newline()
        self.logger.info(
            "Session exited",
            completed=self.analyses_completed,
            failed=self.analyses_failed,
            summary=self.output.summary,
        )

    def _scan(self) -> str:
        self.output.newline()
        self.output.info("Scanning for SD/eMMC devices…")
        self.devices = discover_devices(self.context)
        self.logger.debug("Scan finished", devices=[d.name for d in self.devices])

        if not self.devices:
            self.output.newline()
            self.output.error("No SD/eMMC devices found. Please insert a device and retry.")
            self.output.newline()
            return EXITING

        return LISTING

    def _list(self) -> str:
        style = self.output.style
        self.output.newline()
        self.output.subtitle("Available SD/eMMC devices:")
        self.output.newline()
        for index, device in enumerate(self.devices, start=1):
            self.output.plain(
                f"  {style.apply(LABEL, f'{index})')} {device.path} ({device.capacity_gb} GB)"
            )
        self.output.newline()
        self.output.plain(f"  {style.apply(LABEL, '0)')} Exit")
        self.output.newline()
        return AWAITING_CHOICE

    def _await_choice(self) -> str:
        count = len(self.devices)
        line = self.context.read_line(f"Please select a device (1-{count}, or 0 to exit): ")
        if line is None:
            self.output.newline()
            self.logger.info("Input closed")
            return EXITING

        choice = parse_selection(line, count)
        if choice is None:
            self.output.newline()
            self.output.warning("Invalid selection. Try again.")
            self.logger.debug("Invalid selection", input=line)
            return LISTING

        if choice == 0:
            self.output.newline()
            self.output.info("Exiting selection…")
            return EXITING

        self.selected = self.devices[choice - 1]
        self.output.info(f"Selected device: {self.selected.path}")
        self.logger.info("Device selected", device=self.selected.name)
        return ANALYZING

    def _analyze(self) -> str:
        device = self.selected
        self.output.clear()
        self.output.newline()

        try:
            analysis = analyze_device(device, self.context, self.output, self.config)
        except AnalysisError as e:
            self.analyses_failed += 1
            self.output.error(str(e))
            self.output.newline()
            self.output.error(f"Analysis failed for device {device.path}")
            self.output.newline()
            self.logger.error(
                "Analysis failed",
                device=device.name,
                error=str(e),
                detail=e.detail,
                error_type=type(e).__name__,
            )
            return SCANNING

        if self.report_format == "json":
            self.output.emit(report_to_dict(analysis))
            self.output.write(self.output.to_json())
        else:
            self.output.newline()
            self.output.write(render_report(analysis, self.report_style))

        self.analyses_completed += 1
        self.output.set_summary(
            f"{device.path}: {analysis.health.label}, {analysis.wear.avg_pct}% average wear"
        )
        self.output.newline()
        self.output.success("Analysis completed successfully!")
        self.output.newline()
        self.logger.info(
            "Analysis completed",
            device=device.name,
            health=analysis.health.value,
            average_wear_pct=analysis.wear.avg_pct,
        )
        return SCANNING
