"""CLI — 锁定清单与依赖查询"""

from __future__ import annotations

import click

from vendorpin.cli import active_groups, handle_errors, pipeline_options
from vendorpin.core.config import get_config
from vendorpin.core.installer import Installer


def register(group: click.Group) -> None:
    group.add_command(lock)
    group.add_command(list_deps)


@click.command()
@click.option("--manifest", "-m", default="", help="依赖清单路径（默认取配置）")
@click.option("--output", "-o", default="", help="锁定清单输出路径（默认 <清单>.lock）")
def lock(manifest: str, output: str) -> None:
    """按 vendor 树中当前检出的版本生成锁定清单"""
    installer = Installer(get_config(), manifest=manifest)
    output = output or f"{installer.manifest}.lock"
    with handle_errors():
        locked = installer.lock(output)
    click.echo(f"已锁定 {len(locked)} 个依赖: {output}")


@click.command(name="deps")
@pipeline_options
def list_deps(
    manifest: str, groups: tuple[str, ...], production: bool,
    development: bool, test_env: bool,
) -> None:
    """列出当前平台 / 分组下生效的依赖"""
    from vendorpin.core.manifest import filter_dependencies, load_manifest

    cfg = get_config()
    with handle_errors():
        deps = load_manifest(manifest or cfg.manifest)
    deps = filter_dependencies(
        deps,
        groups=[*cfg.groups, *active_groups(groups, production, development, test_env)],
        goos=cfg.goos,
    )
    if not deps:
        click.echo("没有生效的依赖。")
        return
    for d in deps:
        ref = d.requested_ref or "-"
        flags = ",".join(k for k in ("private", "insecure", "skipdep") if getattr(d, k))
        click.echo(f"  {d.target_path:40s} {ref:16s} {flags}")
