"""
笔记 CLI - 通过 HTTP 客户端操作运行中的笔记服务

使用方式:
    notes list
    notes list --search 会议 --format json
    notes save --title "标题" --content "<p>内容</p>"
    notes save --id 1700000000000 --title "新标题" --content "..."
    notes delete 1700000000000
"""

import argparse
import asyncio
import json
import sys
from datetime import datetime
from typing import List, Optional

from app.core.config import settings
from domains.core.logging import LogConfig, LogFormat, configure_logging
from domains.note_hub import Note, NoteClient, TransportError
from domains.note_hub.services import (
    display_title,
    filter_notes,
    new_note,
    plain_preview,
    sort_by_recent,
    touch,
)


def format_timestamp(ms: int) -> str:
    """格式化毫秒时间戳用于显示"""
    return datetime.fromtimestamp(ms / 1000).strftime("%Y-%m-%d %H:%M:%S")


def print_notes(notes: List[Note], output_format: str = "table") -> None:
    if output_format == "json":
        print(json.dumps([n.to_dict() for n in notes], ensure_ascii=False, indent=2))
        return

    if not notes:
        print("(无笔记)")
        return

    for note in notes:
        print(f"{note.id}  {format_timestamp(note.updated_at)}  {display_title(note)}")
        preview = plain_preview(note, limit=80)
        if preview:
            print(f"    {preview}")
    print(f"\n共 {len(notes)} 条")


async def cmd_list(client: NoteClient, args: argparse.Namespace) -> int:
    notes = sort_by_recent(await client.list_notes())
    print_notes(filter_notes(notes, args.search or ""), args.format)
    return 0


async def cmd_save(client: NoteClient, args: argparse.Namespace) -> int:
    if args.id is None:
        note = new_note(title=args.title, content=args.content)
    else:
        note = touch(Note(id=args.id), title=args.title, content=args.content)

    await client.save_note(note)
    print(f"已保存: {note.id}")
    return 0


async def cmd_delete(client: NoteClient, args: argparse.Namespace) -> int:
    await client.delete_note(args.id)
    print(f"已删除: {args.id}")
    return 0


COMMANDS = {
    "list": cmd_list,
    "save": cmd_save,
    "delete": cmd_delete,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="notes",
        description="笔记服务命令行客户端",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--url", default=settings.NOTES_API_URL, help="API 服务地址")
    parser.add_argument(
        "--timeout", type=float, default=settings.NOTES_API_TIMEOUT, help="请求超时（秒）"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    list_parser = subparsers.add_parser("list", help="列出笔记（最近更新在前）")
    list_parser.add_argument("--search", "-s", help="按标题或内容搜索")
    list_parser.add_argument("--format", "-f", choices=["table", "json"], default="table")

    save_parser = subparsers.add_parser("save", help="新建或整条替换笔记")
    save_parser.add_argument("--id", type=int, help="已有笔记 ID（省略则新建）")
    save_parser.add_argument("--title", default="", help="标题")
    save_parser.add_argument("--content", default="", help="内容（HTML）")

    delete_parser = subparsers.add_parser("delete", help="删除笔记")
    delete_parser.add_argument("id", type=int, help="笔记 ID")

    return parser


async def run_command(args: argparse.Namespace, client: Optional[NoteClient] = None) -> int:
    client = client or NoteClient(base_url=args.url, timeout=args.timeout, api_prefix=settings.API_PREFIX)
    async with client:
        return await COMMANDS[args.command](client, args)


def main(argv: Optional[List[str]] = None) -> int:
    configure_logging(LogConfig(
        level="WARNING", format=LogFormat.CONSOLE, add_timestamp=False, service_name="notes-cli"
    ))
    args = build_parser().parse_args(argv)

    try:
        return asyncio.run(run_command(args))
    except TransportError as e:
        print(f"错误: {e.message}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
