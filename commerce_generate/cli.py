"""Generate commerce products from the command line.

Usage:
    commerce-generate --num 20
    commerce-generate --num 5 --num-var 3 --language en --language fr
    commerce-generate --num 10 --kill --cascade --skip-fields body,tags
"""

import argparse
import asyncio
import sys
from typing import Any

import structlog
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from commerce_generate.api.schemas import GenerateRequest
from commerce_generate.catalog.generator import GeneratorConfig, parse_skip_fields
from commerce_generate.catalog.service import GenerateService
from commerce_generate.domain.exceptions import InvalidGenerateSettingsError
from commerce_generate.infrastructure.config import settings
from commerce_generate.infrastructure.logging import configure_logging

logger = structlog.get_logger()

EXIT_INVALID_SETTINGS = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="commerce-generate",
        description="Generate commerce products. Optionally delete current products.",
    )
    parser.add_argument("--num", type=int, default=settings.default_num,
                        help="Number of products to generate")
    parser.add_argument("--kill", action="store_true",
                        help="Delete all products before generating new ones")
    parser.add_argument("--cascade", action="store_true",
                        help="With --kill, also delete the products' variations")
    parser.add_argument("--title-length", type=int, default=settings.default_title_length,
                        help="Maximum length of product titles")
    parser.add_argument("--num-var", type=int, default=settings.default_num_variations,
                        help="Number of variations per product")
    parser.add_argument("--title-var-length", type=int, default=None,
                        help="Maximum length of variation SKUs (defaults to --title-length)")
    parser.add_argument("--price-min", type=int, default=settings.default_price_min)
    parser.add_argument("--price-max", type=int, default=settings.default_price_max)
    parser.add_argument("--currency", default=settings.default_currency)
    parser.add_argument("--language", dest="languages", action="append", default=None,
                        help="Langcode to assign (repeatable, defaults to the site default)")
    parser.add_argument("--skip-fields", default="",
                        help="Comma-separated field names to leave unpopulated")
    parser.add_argument("--seed", type=int, default=None,
                        help="Random seed for reproducible output")
    return parser


def config_from_args(args: argparse.Namespace) -> GeneratorConfig:
    """Validate parsed arguments into a generator configuration.

    Args:
        args: Parsed command line arguments.

    Returns:
        Generator configuration.

    Raises:
        ValidationError: If an argument is out of range.
    """
    request = GenerateRequest(
        num=args.num,
        kill=args.kill,
        title_length=args.title_length,
        num_var=args.num_var,
        title_var_length=args.title_var_length,
        price_min=args.price_min,
        price_max=args.price_max,
        currency=args.currency,
        add_language=args.languages or [settings.default_language],
        cascade=args.cascade,
        seed=args.seed,
    )
    return request.to_config(parse_skip_fields(args.skip_fields))


async def generate(
    config: GeneratorConfig,
    engine: AsyncEngine | None = None,
) -> dict[str, Any]:
    """Create tables and run the generator.

    Args:
        config: Generator configuration.
        engine: Database engine (defaults to the application engine).

    Returns:
        Generation result.
    """
    from commerce_generate.infrastructure import database

    bind = engine or database.engine
    await database.create_tables(bind)

    session_factory = async_sessionmaker(bind, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        return await GenerateService(session).generate(config)


def main(argv: list[str] | None = None, engine: AsyncEngine | None = None) -> int:
    """Main entry point.

    Returns:
        Process exit code.

    Raises:
        SQLAlchemyError: If storage fails; the error is reported first.
    """
    configure_logging(settings.log_level)
    args = build_parser().parse_args(argv)

    try:
        config = config_from_args(args)
    except ValidationError as e:
        for error in e.errors():
            field = ".".join(str(part) for part in error["loc"]) or "settings"
            print(f"  ✗ {field}: {error['msg']}", file=sys.stderr)
        return EXIT_INVALID_SETTINGS

    try:
        result = asyncio.run(generate(config, engine))
    except InvalidGenerateSettingsError as e:
        print(f"  ✗ {e.message}", file=sys.stderr)
        return EXIT_INVALID_SETTINGS
    except SQLAlchemyError as e:
        print(f"  ✗ Error: {e}", file=sys.stderr)
        raise

    for message in result["messages"]:
        print(f"  ✓ {message}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
