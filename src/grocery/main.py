#!/usr/bin/env python3
"""
Command-line entry point for the grocery consolidation engine.

Reads recipe text files (or a whole generated meal plan with --plan) and
prints the consolidated shopping list.

Usage:
    grocery-list tacos.txt stew.txt --on-hand "1 cup flour, 6 eggs"
    grocery-list plan.txt --plan --json
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from grocery.config import Settings, configure_logging
from grocery.shopping.engine import ShoppingListBuilder
from grocery.shopping.extractor import split_plan_sections, split_recipes
from grocery.shopping.formatter import render_text

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Argument parser for the grocery-list command."""
    parser = argparse.ArgumentParser(
        description="Consolidate recipe ingredients into a shopping list",
    )
    parser.add_argument(
        "files",
        nargs="+",
        metavar="FILE",
        help="Recipe text file(s); use - for stdin",
    )
    parser.add_argument(
        "--on-hand",
        type=str,
        default="",
        help="Ingredients already on hand, comma or newline separated",
    )
    parser.add_argument(
        "--on-hand-file",
        type=str,
        help="File listing ingredients already on hand",
    )
    parser.add_argument(
        "--plan",
        action="store_true",
        help="Treat each file as a whole generated meal plan",
    )
    parser.add_argument(
        "--convert-units",
        action="store_true",
        help="Fold tsp into tbsp, pints/quarts into cups, kg into g, ...",
    )
    parser.add_argument(
        "--fold-cuts",
        action="store_true",
        help="Merge protein cuts (chicken thigh -> chicken)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the result as JSON",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


def _read_text(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point."""
    args = build_parser().parse_args(argv)
    settings = Settings.from_env()

    configure_logging("DEBUG" if args.verbose else settings.log_level)

    try:
        texts = [_read_text(path) for path in args.files]
        on_hand = args.on_hand
        if args.on_hand_file:
            on_hand = "\n".join(filter(None, [on_hand, _read_text(args.on_hand_file)]))
    except OSError as e:
        logger.error(f"Could not read input: {e}")
        return 1

    builder = ShoppingListBuilder(
        convert_units=args.convert_units or settings.convert_units,
        fold_cuts=args.fold_cuts or settings.fold_cuts,
    )

    if args.plan:
        # Several plans are consolidated into one list
        recipes = []
        for text in texts:
            recipes.extend(split_recipes(split_plan_sections(text).recipes))
        result = builder.build(recipes, on_hand)
    else:
        result = builder.build(texts, on_hand)

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        print(render_text(result.shopping_list))

    return 0


if __name__ == "__main__":
    sys.exit(main())
