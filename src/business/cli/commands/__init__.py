"""
CLI Commands - 命令行子命令
"""

from src.business.cli.commands.monitor import snapshot, watch

__all__ = ["snapshot", "watch"]
