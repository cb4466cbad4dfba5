"""CLI 진입점"""

import logging
import sys

import click
from rich.console import Console
from rich.table import Table

from kbfs_search.core.bootstrap import create_bootstrap
from kbfs_search.core.config import Config
from kbfs_search.core.telemetry import init_telemetry
from kbfs_search.fs.local_fs import LocalFileSystem

console = Console()


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


@click.group()
@click.pass_context
def cli(ctx: click.Context) -> None:
    """kbfs-search: 파일 이름 전문 검색"""
    config = Config.from_env()
    _setup_logging(config.log_level)
    init_telemetry(f"{config.otel_service_name}-cli", config)

    ctx.obj = create_bootstrap(config)
    ctx.call_on_close(ctx.obj.close)


@cli.command()
@click.argument("path", type=click.Path(exists=True, file_okay=False))
@click.option("--root-name", default="", help="문서 ID 앞에 붙는 논리 루트 경로")
@click.pass_obj
def index(bootstrap, path: str, root_name: str) -> None:
    """PATH 아래 전체 트리 인덱싱"""
    result = bootstrap.tree_indexer.index_tree(LocalFileSystem(path, logical_root=root_name))

    console.print(
        f"[green]✓[/green] {result.documents}개 인덱싱 "
        f"(디렉토리 {result.directories}, 제외 {result.skipped}) "
        f"{result.elapsed_seconds:.2f}s"
    )


@cli.command()
@click.argument("query")
@click.option("--limit", type=int, default=None, help="최대 결과 수")
@click.pass_obj
def search(bootstrap, query: str, limit: int | None) -> None:
    """QUERY로 검색 (엔진 쿼리 문법 그대로)"""
    hits = bootstrap.query_service.search_hits(query, limit)
    if not hits:
        console.print("[yellow]결과 없음[/yellow]")
        return

    table = Table(show_header=True)
    table.add_column("#", justify="right")
    table.add_column("Path")
    table.add_column("Kind")
    table.add_column("Score", justify="right")
    for i, hit in enumerate(hits, 1):
        table.add_row(str(i), hit.doc_id, hit.kind or "-", f"{hit.score:.3f}")
    console.print(table)


@cli.command()
@click.pass_obj
def stats(bootstrap) -> None:
    """인덱스 문서 수"""
    console.print(f"documents: {bootstrap.index.doc_count()}")


def main() -> None:
    """CLI 진입점"""
    cli()


if __name__ == "__main__":
    main()
