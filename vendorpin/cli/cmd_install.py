"""CLI — 拉取 / 安装命令"""

from __future__ import annotations

import click

from vendorpin.cli import active_groups, handle_errors, pipeline_options
from vendorpin.core.config import get_config
from vendorpin.core.installer import Installer

_PASSTHROUGH = {"ignore_unknown_options": True}


def register(group: click.Group) -> None:
    group.add_command(install)
    group.add_command(populate)


@click.command(context_settings=_PASSTHROUGH)
@pipeline_options
@click.argument("go_args", nargs=-1, type=click.UNPROCESSED)
def install(
    manifest: str, groups: tuple[str, ...], production: bool,
    development: bool, test_env: bool, go_args: tuple[str, ...],
) -> None:
    """拉取、锁定并构建全部依赖（额外参数透传给 go get / go install）"""
    installer = Installer(
        get_config(), manifest=manifest,
        groups=active_groups(groups, production, development, test_env),
    )
    with handle_errors():
        deps = installer.install(list(go_args))
    click.echo(f"已安装 {len(deps)} 个依赖到 {installer.vendor_root}")


@click.command(context_settings=_PASSTHROUGH)
@pipeline_options
@click.argument("go_args", nargs=-1, type=click.UNPROCESSED)
def populate(
    manifest: str, groups: tuple[str, ...], production: bool,
    development: bool, test_env: bool, go_args: tuple[str, ...],
) -> None:
    """拉取并锁定全部依赖，不构建"""
    installer = Installer(
        get_config(), manifest=manifest,
        groups=active_groups(groups, production, development, test_env),
    )
    with handle_errors():
        deps = installer.populate(list(go_args))
    click.echo(f"已拉取 {len(deps)} 个依赖到 {installer.vendor_root}")
