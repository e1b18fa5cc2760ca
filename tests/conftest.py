"""Shared test fixtures."""

import subprocess
import sys
from pathlib import Path

import pytest

# Add project root to path so the package imports without installation
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

FIXTURES_DIR = Path(__file__).parent / "fixtures"


class MockContext:
    """Mock Context for testing without real devices, tools or a terminal."""

    def __init__(
        self,
        tools_available: list[str] | None = None,
        command_outputs: dict[tuple, str | Exception | subprocess.CompletedProcess] | None = None,
        file_contents: dict[str, str] | None = None,
        block_devices: list[str] | None = None,
        inputs: list[str] | None = None,
        root: bool = True,
        interactive: bool = True,
    ):
        self.tools_available = set(tools_available or [])
        self.command_outputs = command_outputs or {}
        self.file_contents = file_contents or {}
        self.block_devices = set(block_devices or [])
        self.inputs = list(inputs or [])
        self.root = root
        self.interactive = interactive
        self.commands_run: list[list[str]] = []
        self.run_kwargs: list[dict] = []
        self.prompts: list[str] = []

    def check_tool(self, name: str) -> bool:
        """Check if tool is in mocked available list."""
        return name in self.tools_available

    def run(
        self,
        cmd: list[str],
        check: bool = False,
        **kwargs,
    ) -> subprocess.CompletedProcess:
        """Return mocked command output."""
        self.commands_run.append(cmd)
        self.run_kwargs.append(kwargs)
        key = tuple(cmd)
        if key not in self.command_outputs:
            raise KeyError(f"No mock output for command: {cmd}")

        output = self.command_outputs[key]
        if isinstance(output, BaseException):
            raise output

        # Allow passing CompletedProcess directly for more control (e.g., non-zero returncode)
        if isinstance(output, subprocess.CompletedProcess):
            return output

        return subprocess.CompletedProcess(
            cmd,
            returncode=0,
            stdout=output,
            stderr="",
        )

    def read_file(self, path: str) -> str:
        """Return mocked file content."""
        if path not in self.file_contents:
            raise FileNotFoundError(f"No mock content for: {path}")
        content = self.file_contents[path]
        if isinstance(content, Exception):
            raise content
        return content

    def file_exists(self, path: str) -> bool:
        """Check if path is a mocked file or block device."""
        return path in self.file_contents or path in self.block_devices

    def is_block_device(self, path: str) -> bool:
        """Check if path is in mocked block devices."""
        return path in self.block_devices

    def is_root(self) -> bool:
        """Return mocked privilege."""
        return self.root

    def is_interactive(self) -> bool:
        """Return mocked terminal state."""
        return self.interactive

    def read_line(self, prompt: str) -> str | None:
        """Return the next scripted input line, None once exhausted."""
        self.prompts.append(prompt)
        if not self.inputs:
            return None
        value = self.inputs.pop(0)
        if isinstance(value, BaseException):
            raise value
        return value


@pytest.fixture
def mock_context():
    """Factory fixture for creating MockContext instances."""
    def _create(**kwargs) -> MockContext:
        return MockContext(**kwargs)
    return _create


@pytest.fixture
def fixtures_dir() -> Path:
    """Path to test fixtures directory."""
    return FIXTURES_DIR


def load_fixture(category: str, name: str) -> str:
    """Load a fixture file by category and name."""
    fixture_path = FIXTURES_DIR / category / name
    if not fixture_path.exists():
        raise FileNotFoundError(f"Fixture not found: {fixture_path}")
    return fixture_path.read_text()


# mmcblk0: 58 GB, 1.02 GB/day over one day of uptime, wear 10%/20%, Pre-EOL normal
HEALTHY_SIZE = "122142720\n"
HEALTHY_STAT = "   15321        0   987654     5000     6789      100  2000000    20000        0     9000    25000\n"
UPTIME_ONE_DAY = "86400.00 170000.00\n"


def emmc_host(
    extcsd: str,
    names: str = "mmcblk0\n",
    devices: list[str] | None = None,
    **kwargs,
) -> MockContext:
    """Build a MockContext for a host with healthy sysfs data for each device."""
    devices = devices if devices is not None else ["mmcblk0"]
    command_outputs = {("lsblk", "-dno", "NAME"): names}
    file_contents = {"/proc/uptime": UPTIME_ONE_DAY}
    for name in devices:
        command_outputs[("mmc", "extcsd", "read", f"/dev/{name}")] = extcsd
        file_contents[f"/sys/block/{name}/size"] = HEALTHY_SIZE
        file_contents[f"/sys/block/{name}/stat"] = HEALTHY_STAT

    command_outputs.update(kwargs.pop("command_outputs", {}))
    file_contents.update(kwargs.pop("file_contents", {}))
    kwargs.setdefault("tools_available", ["mmc", "lsblk", "sudo"])

    return MockContext(
        command_outputs=command_outputs,
        file_contents=file_contents,
        block_devices=[f"/dev/{name}" for name in devices],
        **kwargs,
    )


@pytest.fixture
def extcsd_healthy() -> str:
    """Register dump with wear A=0x01, B=0x02, Pre-EOL normal."""
    return load_fixture("emmc", "extcsd_healthy.txt")


@pytest.fixture
def extcsd_worn() -> str:
    """Register dump with wear A=0x09, B=0x0B, Pre-EOL warning."""
    return load_fixture("emmc", "extcsd_worn.txt")


@pytest.fixture
def extcsd_no_lifetime() -> str:
    """Register dump from an older device without lifetime fields."""
    return load_fixture("emmc", "extcsd_no_lifetime.txt")
