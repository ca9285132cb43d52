"""vendorpin 命令行接口

CLI 按领域拆分为子模块，每个模块注册自己的命令到 main group。
"""

from __future__ import annotations

import os
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Any

import click

from vendorpin import __version__
from vendorpin.core.config import DEFAULT_CONFIG_FILE, init_config
from vendorpin.core.exceptions import VendorError
from vendorpin.utils.logger import setup_logging
from vendorpin.utils.shell import set_verbose


@contextmanager
def handle_errors() -> Iterator[None]:
    """把业务异常转换为 ClickException，以非零状态退出"""
    try:
        yield
    except VendorError as e:
        raise click.ClickException(f"[{e.code}] {e}") from e


def pipeline_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """install / populate / deps 共用的清单与分组选项

    不提供短选项，以免吞掉透传给 go 的 -tags 之类参数。
    """
    options = [
        click.option("--manifest", default="", help="依赖清单路径（默认取配置）"),
        click.option("--group", "groups", multiple=True, help="启用的分组（可多次指定）"),
        click.option("--production", is_flag=True, help="启用 production 分组"),
        click.option("--development", is_flag=True, help="启用 development 分组"),
        click.option("--test", "test_env", is_flag=True, help="启用 test 分组"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def active_groups(
    groups: tuple[str, ...], production: bool, development: bool, test_env: bool,
) -> list[str]:
    result = list(groups)
    for flag, name in ((production, "production"), (development, "development"), (test_env, "test")):
        if flag:
            result.append(name)
    return result


@click.group()
@click.version_option(version=__version__)
@click.option("--config", "config_path", default=DEFAULT_CONFIG_FILE, help="配置文件路径")
@click.option("--verbose", "-v", is_flag=True, help="回显每条外部命令及其工作目录")
def main(config_path: str, verbose: bool) -> None:
    """vendorpin - 第三方源码依赖的隔离拉取、版本锁定与构建"""
    with handle_errors():
        cfg = init_config(config_path)
    cfg.verbose = cfg.verbose or verbose
    setup_logging(
        level=os.getenv("VENDORPIN_LOG_LEVEL", "INFO"),
        json_output=os.getenv("VENDORPIN_LOG_JSON", "") == "1",
        verbose=cfg.verbose,
    )
    set_verbose(cfg.verbose)


# 注册各领域子命令
from vendorpin.cli.cmd_install import register as _reg_install  # noqa: E402
from vendorpin.cli.cmd_lock import register as _reg_lock  # noqa: E402

_reg_install(main)
_reg_lock(main)
