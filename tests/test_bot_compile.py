import py_compile
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent


def test_bot_and_main_compile() -> None:
    """The Discord-facing modules should at least be syntactically valid.

    They are only imported when the bot starts, so compiling them here catches
    syntax errors without connecting to Discord.
    """

    for module in (
        "farm_bot/bot.py",
        "farm_bot/main.py",
        "farm_bot/commands/register.py",
        "farm_bot/ui/views.py",
        "farm_bot/ui/modals.py",
    ):
        py_compile.compile(str(ROOT / module), doraise=True)
