"""emmcctl - interactive eMMC/SD lifetime and health analyzer."""

__version__ = "0.1.0"
