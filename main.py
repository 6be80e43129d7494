# main.py
"""Command line entry point for the trading journal."""
import argparse
import asyncio
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from src.analysis import AnalysisError, TradeAnalyzer
from src.config.settings import Settings
from src.csv_io import (
    TradeExporter,
    TradeImporter,
    TradeImportError,
    build_template_csv,
    describe_import_error,
)
from src.journal import JournalManager


# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='[%(asctime)s] %(levelname)s: %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)
logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("config/settings.yaml")


def create_data_dirs(settings: Settings) -> None:
    """Create required data directories if they don't exist."""
    dirs = [
        Path(settings.journal.data_dir),
        Path(settings.csv.export_dir),
    ]

    for dir_path in dirs:
        dir_path.mkdir(parents=True, exist_ok=True)

    logger.info("Data directories verified")


def load_and_validate_config(config_path: Path = DEFAULT_CONFIG_PATH) -> Settings:
    """Load and validate configuration.

    A missing config file falls back to default settings.

    Returns:
        Settings object loaded from YAML.

    Raises:
        SystemExit: If YAML parsing or validation fails.
    """
    load_dotenv()

    if not config_path.exists():
        logger.info(f"{config_path} not found, using default settings")
        settings = Settings()
    else:
        try:
            settings = Settings.from_yaml(config_path)
            logger.info(f"Settings loaded from {config_path}")
        except Exception as e:
            logger.error(f"Failed to parse {config_path}: {e}")
            sys.exit(1)

    create_data_dirs(settings)
    return settings


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Trading journal analytics and CSV tools")
    parser.add_argument("--config", type=Path, default=DEFAULT_CONFIG_PATH, help="Path to settings YAML")
    parser.add_argument("--user", default=None, help="Journal owner (defaults to system.default_user)")

    subparsers = parser.add_subparsers(dest="command", required=True)

    template = subparsers.add_parser("template", help="Write the CSV import template")
    template.add_argument("--output", type=Path, default=None, help="Target file")

    import_cmd = subparsers.add_parser("import", help="Import trades from a CSV file")
    import_cmd.add_argument("path", type=Path, help="CSV file to import")

    export = subparsers.add_parser("export", help="Export trades to a CSV file")
    export.add_argument("--output", type=Path, default=None, help="Target file")

    subparsers.add_parser("stats", help="Print dashboard metrics")

    analyze = subparsers.add_parser("analyze", help="Request AI feedback on trades")
    analyze.add_argument("--prompt-file", type=Path, default=None, help="Custom prompt template")

    return parser


def run_template(settings: Settings, output: Path | None) -> None:
    path = output or Path(settings.csv.export_dir) / settings.csv.template_filename
    path.write_text(build_template_csv(), encoding=settings.csv.encoding)
    logger.info(f"Template written to {path}")


async def run_import(journal: JournalManager, settings: Settings, user_id: str, path: Path) -> None:
    importer = TradeImporter(journal.store, settings.csv)
    summary = await importer.import_file(path, user_id)
    logger.info(summary.message)


async def run_export(journal: JournalManager, settings: Settings, user_id: str, output: Path | None) -> None:
    exporter = TradeExporter(journal.store, settings.csv)
    path = await exporter.export(user_id, output)
    if path is None:
        logger.info("Nothing exported")


async def run_stats(journal: JournalManager, user_id: str) -> None:
    dashboard = await journal.get_dashboard(user_id)
    metrics = dashboard["metrics"]

    logger.info("=" * 60)
    logger.info(f"Trades: {metrics.total_trades} ({metrics.completed_trades} completed)")
    for label, value in dashboard["display"].items():
        logger.info(f"{label.replace('_', ' ').title()}: {value}")
    logger.info(f"Profit factor: {metrics.profit_factor:.2f}")
    logger.info(f"Expectancy: {metrics.expectancy:.2f}")
    logger.info(f"Sharpe ratio: {metrics.sharpe_ratio:.2f}")
    logger.info(f"Total P&L: {metrics.total_pnl:.2f}")
    if dashboard["streaks"]:
        longest = max(dashboard["streaks"], key=lambda s: s.length)
        logger.info(f"Longest streak: {longest.length} {longest.outcome.value}")
    logger.info("=" * 60)


async def run_analyze(
    journal: JournalManager, settings: Settings, user_id: str, prompt_file: Path | None
) -> None:
    custom_prompt = prompt_file.read_text() if prompt_file else None
    trades = await journal.get_trades(user_id)
    analyzer = TradeAnalyzer(settings.analysis)
    analysis = await analyzer.analyze(trades, custom_prompt)
    print(analysis)


async def main(argv: list[str] | None = None) -> int:
    """Run a journal command.

    Returns:
        Process exit status.
    """
    args = build_parser().parse_args(argv)
    settings = load_and_validate_config(args.config)
    user_id = args.user or settings.system.default_user
    journal = JournalManager(settings=settings.journal)

    try:
        if args.command == "template":
            run_template(settings, args.output)
        elif args.command == "import":
            await run_import(journal, settings, user_id, args.path)
        elif args.command == "export":
            await run_export(journal, settings, user_id, args.output)
        elif args.command == "stats":
            await run_stats(journal, user_id)
        elif args.command == "analyze":
            await run_analyze(journal, settings, user_id, args.prompt_file)
    except TradeImportError as e:
        logger.error(describe_import_error(e))
        return 1
    except (AnalysisError, ValueError, OSError) as e:
        logger.error(f"{args.command} failed: {e}")
        return 1

    return 0


def cli() -> None:
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    cli()
