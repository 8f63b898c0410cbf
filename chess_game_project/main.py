#!/usr/bin/env python3
"""
Chess Game 主入口文件

提供命令行对弈、走法查询和系统信息命令。
"""

import sys
import time
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

# 添加项目根目录到Python路径
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from chess_game_project import __version__, __description__
from chess_game_project.src.chess_rules_engine.config import (
    ConfigManager, GameConfig, AIConfig, SystemConfig
)
from chess_game_project.src.chess_rules_engine.game_interface import (
    GameInterface, get_piece_symbol
)
from chess_game_project.src.chess_rules_engine.rules_engine import (
    BOARD_SIZE, ChessBoard, Move, PieceColor, RuleEngine, parse_square, square_name
)
from chess_game_project.src.chess_rules_engine.utils import (
    ChessEngineError, configure_logging
)

console = Console()

QUIT_COMMANDS = ('quit', 'exit', 'q')
RESET_COMMANDS = ('reset', 'new')


def print_banner():
    """打印项目横幅"""
    banner_text = Text()
    banner_text.append("♔ Chess Game ♚\n", style="bold blue")
    banner_text.append(f"版本: {__version__}\n", style="green")
    banner_text.append(__description__, style="white")

    panel = Panel(
        banner_text,
        title="国际象棋对弈系统",
        title_align="center",
        border_style="blue",
        padding=(1, 2)
    )
    console.print(panel)


def render_board(board: ChessBoard, highlights=(), show_coordinates: bool = True) -> Table:
    """把棋盘渲染为 rich 表格，highlights 中的格子用绿色底标出"""
    files = [chr(ord('a') + col) for col in range(BOARD_SIZE)]
    table = Table(show_header=show_coordinates, header_style="bold", show_lines=False, box=None)
    table.add_column("")
    for name in files:
        table.add_column(name, justify="center")

    highlight_set = set(highlights)
    for row in range(BOARD_SIZE):
        cells = []
        for col in range(BOARD_SIZE):
            piece = board.piece_at((row, col))
            symbol = get_piece_symbol(piece) if piece else "·"
            if (row, col) in highlight_set:
                symbol = f"[on green]{symbol}[/on green]"
            cells.append(symbol)
        table.add_row(str(BOARD_SIZE - row) if show_coordinates else "", *cells)
    return table


def print_game_state(interface: GameInterface, game_config: GameConfig, highlights=()):
    """打印棋盘、走法记录和当前状态"""
    session = interface.get_session()
    status = interface.get_game_status()

    console.print(render_board(session.board,
                              highlights if game_config.show_legal_moves else (),
                              game_config.show_coordinates))

    if status['move_history']:
        console.print("[dim]" + "  ".join(status['move_history'][-3:]) + "[/dim]")

    captured = []
    for color in (PieceColor.WHITE, PieceColor.BLACK):
        pieces = session.captured_pieces[color]
        if pieces:
            symbols = "".join(get_piece_symbol(p) for p in pieces)
            captured.append(f"{color.display_name}吃子: {symbols}")
    if captured:
        console.print("  ".join(captured))

    if status['game_over']:
        if session.winner is not None:
            console.print(Panel(f"将死! {session.winner.display_name}获胜",
                                border_style="green"))
        else:
            console.print(Panel("逼和! 对局为和棋", border_style="yellow"))
    elif status['in_check']:
        console.print(f"[red]{session.current_player.display_name}被将军![/red]")
    else:
        console.print(f"轮到{session.current_player.display_name}走棋")


def load_configs(config_dir: Optional[str]):
    """读取配置目录中的配置，未指定目录时使用默认配置"""
    if config_dir is None:
        return GameConfig(), AIConfig(), SystemConfig()

    manager = ConfigManager(config_dir)
    return manager.get_game_config(), manager.get_ai_config(), manager.get_system_config()


@click.group()
@click.version_option(version=__version__, prog_name="Chess Game")
@click.option('--debug', is_flag=True, help='启用调试模式')
@click.pass_context
def cli(ctx: click.Context, debug: bool):
    """国际象棋对弈系统 - 支持双人对战和人机对战"""
    ctx.ensure_object(dict)
    ctx.obj['debug'] = debug
    if debug:
        console.print("[yellow]调试模式已启用[/yellow]")


@cli.command()
@click.option('--mode', type=click.Choice(['human-vs-human', 'human-vs-computer']),
              default=None, help='对局模式')
@click.option('--ai-color', type=click.Choice(['white', 'black']),
              default=None, help='电脑执子颜色')
@click.option('--seed', type=int, default=None, help='随机种子')
@click.option('--delay', type=float, default=None, help='电脑走棋前的停顿(秒)')
@click.option('--config', type=click.Path(file_okay=False), help='配置目录路径')
@click.pass_context
def play(ctx: click.Context, mode: Optional[str], ai_color: Optional[str],
         seed: Optional[int], delay: Optional[float], config: Optional[str]):
    """开始一局对弈，输入如 e2e4 的走法"""
    game_config, ai_config, system_config = load_configs(config)
    configure_logging(system_config, ctx.obj.get('debug', False))

    # 命令行参数覆盖配置文件
    if mode is not None:
        game_config.game_mode = mode
    if ai_color is not None:
        game_config.ai_color = ai_color
    if seed is not None:
        ai_config.seed = seed
    if delay is not None:
        ai_config.think_delay = delay

    interface = GameInterface(ai_config=ai_config)
    interface.create_session(game_config)

    console.print(f"[blue]开始对局 - 模式: {game_config.game_mode}[/blue]")
    console.print("[dim]输入走法如 e2e4，输入格子名如 e2 查看可走位置，"
                  "reset 重新开始，quit 退出[/dim]")
    print_game_state(interface, game_config)

    while True:
        if interface.is_ai_turn():
            if ai_config.think_delay > 0:
                time.sleep(ai_config.think_delay)
            move = interface.play_ai_move()
            if move is not None:
                console.print(f"[cyan]电脑走棋: {move}[/cyan]")
            print_game_state(interface, game_config)
            continue

        if interface.get_session().is_finished:
            command = click.prompt("对局结束，输入 reset 重新开始或 quit 退出",
                                   default='quit', show_default=False)
        else:
            command = click.prompt("请输入走法")
        command = command.strip().lower()

        if command in QUIT_COMMANDS:
            console.print("[yellow]对局结束[/yellow]")
            break

        if command in RESET_COMMANDS:
            interface.reset()
            console.print("[green]已重新开始[/green]")
            print_game_state(interface, game_config)
            continue

        if interface.get_session().is_finished:
            continue

        try:
            if len(command) == 2:
                from_pos = parse_square(command)
                destinations = interface.get_legal_destinations(from_pos)
                if not destinations:
                    console.print("[yellow]该位置没有可走的棋子[/yellow]")
                    continue
                names = ", ".join(square_name(pos) for pos in destinations)
                console.print(f"可走位置: {names}")
                print_game_state(interface, game_config, destinations)
                continue

            move = Move.from_coordinate_notation(command)
        except ChessEngineError as e:
            console.print(f"[red]输入无效: {escape(str(e))}[/red]")
            continue

        success, message = interface.make_move(move.from_pos, move.to_pos)
        if not success:
            console.print(f"[red]{escape(message)}[/red]")
            continue
        print_game_state(interface, game_config)


@cli.command()
@click.option('--color', type=click.Choice(['white', 'black']), default='white',
              help='走棋方')
def moves(color: str):
    """列出初始局面下指定一方的所有合法走法"""
    board = ChessBoard.initial_setup()
    player = PieceColor[color.upper()]
    legal_moves = RuleEngine().generate_legal_moves(board, player)

    table = Table(title=f"{player.display_name}合法走法")
    table.add_column("棋子", justify="center")
    table.add_column("走法", justify="center")
    for move in legal_moves:
        table.add_row(get_piece_symbol(board.piece_at(move.from_pos)), str(move))

    console.print(table)
    console.print(f"[green]共 {len(legal_moves)} 种走法[/green]")


@cli.command()
def info():
    """显示系统信息"""
    print_banner()

    status_text = Text()
    status_text.append("📊 系统状态\n", style="bold yellow")
    status_text.append("• 规则引擎: ", style="white")
    status_text.append("可用\n", style="green")
    status_text.append("• 对局模式: ", style="white")
    status_text.append("双人对战 / 人机对战\n", style="green")
    status_text.append("• 电脑棋手: ", style="white")
    status_text.append("随机走子\n", style="green")

    console.print(Panel(status_text, title="系统状态", border_style="yellow"))


def main():
    """主入口函数"""
    try:
        cli(obj={})
    except KeyboardInterrupt:
        console.print("\n[yellow]程序被用户中断[/yellow]")
        sys.exit(0)
    except Exception as e:
        console.print(f"[red]发生错误: {e}[/red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
