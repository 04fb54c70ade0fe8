"""
CLI Main Entry Point - 命令行主入口

使用 Click 库构建命令行工具。
"""

import click

from src.business.cli.commands.monitor import snapshot, watch


@click.group()
@click.version_option(version="0.1.0", prog_name="riskmon")
def cli() -> None:
    """交易员风险监控 - 命令行工具

    从决策记录计算回撤、VaR、风险评分，并在超过阈值时产生预警。
    """
    pass


# 注册子命令
cli.add_command(snapshot)
cli.add_command(watch)


if __name__ == "__main__":
    cli()
