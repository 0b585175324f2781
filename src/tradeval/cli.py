import argparse
import csv
import json
import logging
import sys
from datetime import datetime, timedelta
from pathlib import Path

from .book import dump_trades, load_trades, trade_to_dict
from .config import BUMP_SIZE_KEY, RUNS_KEY, STEPS_KEY, ValuationError, load_config
from .core import (
    DAYS_PER_YEAR,
    EuropeanOptionRecord,
    EuropeanOptionValuationInputs,
    ValuationMethod,
    parse_option_type,
    parse_valuation_method,
)
from .european_option import option_value
from .valuation import recalculate_all

logger = logging.getLogger("tradeval")


def _option_type(s: str):
    kind = parse_option_type(s.capitalize())
    if kind is None:
        raise argparse.ArgumentTypeError("type must be 'Call' or 'Put'")
    return kind


def _method(s: str):
    if s == "all":
        return s
    method = parse_valuation_method(s)
    if method is None:
        raise argparse.ArgumentTypeError(
            "method must be all|Analytical|MonteCarlo|Binomial"
        )
    return method


def cmd_option(args):
    now = datetime.now()
    expiry = now + timedelta(days=args.time * DAYS_PER_YEAR)
    market_data = {
        RUNS_KEY: str(args.runs),
        STEPS_KEY: str(args.steps),
        BUMP_SIZE_KEY: str(args.bump),
    }
    methods = list(ValuationMethod) if args.method == "all" else [args.method]

    for method in methods:
        trade = EuropeanOptionRecord(
            trade_name="cli", spot_price=args.spot, strike=args.strike,
            drift=args.drift, volatility=args.volatility, expiry=expiry,
            currency="", valuation_method=method, option_type=args.type,
        )
        # relative bump for the lattice, absolute for Monte Carlo
        md = dict(market_data)
        if method is ValuationMethod.BINOMIAL:
            md[BUMP_SIZE_KEY] = str(args.tree_bump)
        inputs = EuropeanOptionValuationInputs(trade, {}, md)
        value, delta = option_value(inputs, now=now, rng=args.seed)
        print(f"{method.value:<11} value {value.value:.10f}  delta {delta.value:.10f}")


def _write_csv(trades, path: Path):
    rows = []
    for tid, t in trades.items():
        row = {"id": tid, **trade_to_dict(t)}
        for key in ("value", "delta"):
            money = row.pop(key, None)
            row[key] = money["value"] if money else None
            row[f"{key}Currency"] = money["currency"] if money else None
        rows.append(row)
    fieldnames = []
    for r in rows:
        for k in r:
            if k not in fieldnames:
                fieldnames.append(k)
    with open(path, "w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()
        writer.writerows(rows)


def cmd_book(args):
    try:
        trades = load_trades(args.trades)
        configuration = load_config(args.config) if args.config else {}
        market_data = load_config(args.market_data) if args.market_data else {}
    except (OSError, KeyError, ValueError) as e:
        logger.error("could not read input: %s", e)
        return 1
    logger.info("Pricing %d trades...", len(trades))

    try:
        valued = recalculate_all(trades, configuration, market_data,
                                 seed=args.seed, n_workers=args.workers)
    except ValuationError as e:
        logger.error("valuation failed: %s", e)
        return 1

    if args.output is None:
        json.dump({k: trade_to_dict(t) for k, t in valued.items()},
                  sys.stdout, indent=2)
        print()
    elif Path(args.output).suffix == ".csv":
        _write_csv(valued, Path(args.output))
    else:
        dump_trades(valued, args.output)
    if args.output:
        logger.info("Results written to %s", args.output)
    return 0


def main(argv=None):
    p = argparse.ArgumentParser(prog="tradeval", description="Trade valuation CLI")
    p.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    sub = p.add_subparsers(dest="cmd", required=True)

    # Single option
    p_opt = sub.add_parser("option", help="value a European option")
    p_opt.add_argument("--spot", type=float, required=True)
    p_opt.add_argument("--strike", type=float, required=True)
    p_opt.add_argument("--drift", type=float, required=True, help="percent")
    p_opt.add_argument("--volatility", type=float, required=True, help="percent")
    p_opt.add_argument("--time", type=float, required=True, help="years")
    p_opt.add_argument("--type", type=_option_type, default=_option_type("Call"),
                       help="Call|Put")
    p_opt.add_argument("--method", type=_method, default="all")
    p_opt.add_argument("--runs", type=int, default=100_000,
                       help="Monte Carlo samples")
    p_opt.add_argument("--steps", type=int, default=500, help="binomial tree steps")
    p_opt.add_argument("--bump", type=float, default=0.01,
                       help="absolute spot bump (Monte Carlo)")
    p_opt.add_argument("--tree-bump", dest="tree_bump", type=float, default=0.01,
                       help="relative spot bump (binomial)")
    p_opt.add_argument("--seed", type=int, default=None)
    p_opt.set_defaults(func=cmd_option)

    # Trade book
    p_book = sub.add_parser("book", help="revalue a JSON trade book")
    p_book.add_argument("--trades", required=True, help="trade book JSON")
    p_book.add_argument("--config", help="configuration JSON document")
    p_book.add_argument("--market-data", dest="market_data",
                        help="market data JSON document")
    p_book.add_argument("--output", help="output path (.json or .csv); stdout if omitted")
    p_book.add_argument("--seed", type=int, default=None)
    p_book.add_argument("--workers", type=int, default=1)
    p_book.set_defaults(func=cmd_book)

    args = p.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    return args.func(args) or 0


if __name__ == "__main__":
    sys.exit(main())
