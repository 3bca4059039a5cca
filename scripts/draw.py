#!/usr/bin/env python3
"""
天赋抽取脚本

Usage:
    python scripts/draw.py --mode draw                      # 抽取一手天赋
    python scripts/draw.py --mode draw --include 1004 --variant magic
    python scripts/draw.py --mode replace --talents 1020 1025
    python scripts/draw.py --mode stats --samples 100000    # 品级分布统计
"""
import argparse
import json
import logging
import sys
from collections import Counter
from pathlib import Path

# 添加项目根目录到路径
ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(ROOT))

import numpy as np

from talents import Talent, TalentConfig, TalentError, Variant

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
)
logger = logging.getLogger(__name__)

GRADE_DISPLAY = {0: "普通", 1: "稀有", 2: "史诗", 3: "传说"}


def parse_args():
    parser = argparse.ArgumentParser(description="Talent Draw")

    parser.add_argument(
        "--mode",
        type=str,
        default="draw",
        choices=["draw", "replace", "stats"],
        help="Mode: draw a hand, resolve replacements, or sample grade statistics",
    )
    parser.add_argument(
        "--catalog",
        type=str,
        default=str(ROOT / "data" / "talents.json"),
        help="Talent catalog JSON file",
    )

    # 抽取参数
    parser.add_argument("--include", type=int, help="Talent forced into slot 0")
    parser.add_argument("--times", type=int, default=0, help="Times played")
    parser.add_argument("--achievement", type=int, default=0, help="Achievement count")
    parser.add_argument(
        "--variant",
        type=str,
        default="",
        choices=["", "immortals", "magic", "A", "B"],
        help="Game variant",
    )

    # 替换参数
    parser.add_argument("--talents", nargs="+", type=int, default=[], help="Held talents")

    # 其他
    parser.add_argument("--samples", type=int, default=100000, help="Samples for stats mode")
    parser.add_argument("--seed", type=int, help="Random seed")
    parser.add_argument("--json", action="store_true", help="Print JSON output")
    parser.add_argument("--verbose", action="store_true", help="Verbose output")

    return parser.parse_args()


def load_talent(args) -> Talent:
    """加载天赋目录"""
    with open(args.catalog, "r", encoding="utf-8") as f:
        catalog = json.load(f)

    config = TalentConfig(variant=Variant.parse(args.variant), seed=args.seed)
    talent = Talent(config)
    talent.initial(catalog)
    return talent


def draw(talent: Talent, args):
    """抽取一手天赋"""
    hand = talent.talent_random(
        include=args.include,
        times=args.times,
        achievement=args.achievement,
    )

    if args.json:
        print(json.dumps([t.to_dict() for t in hand], ensure_ascii=False, indent=2))
        return hand

    logger.info("=" * 50)
    for i, t in enumerate(hand):
        logger.info(f"{i}. [{GRADE_DISPLAY[t.grade]}] {t.name} ({t.id}): {t.description}")
    logger.info("=" * 50)
    return hand


def replace(talent: Talent, args):
    """解析替换"""
    result = talent.replace(args.talents)

    if args.json:
        print(json.dumps({str(k): v for k, v in result.items()}, indent=2))
        return result

    if not result:
        logger.info("No replacement")
    for original, final in result.items():
        logger.info(
            f"{talent.information(original)['name']} ({original}) -> "
            f"{talent.information(final)['name']} ({final})"
        )
    return result


def stats(talent: Talent, args):
    """统计品级分布"""
    table = talent.assembler.sampler.build(times=args.times, achievement=args.achievement)
    grades = table.sample_many(np.random.default_rng(args.seed), args.samples)
    counter = Counter(int(g) for g in grades)
    expected = table.probabilities()

    result = {
        grade: {"observed": counter.get(grade, 0) / args.samples, "expected": expected[grade]}
        for grade in sorted(expected, reverse=True)
    }

    if args.json:
        print(json.dumps(result, indent=2))
        return result

    logger.info("=" * 50)
    for grade, r in result.items():
        logger.info(
            f"{GRADE_DISPLAY[grade]}: observed {r['observed']:.2%}, expected {r['expected']:.2%}"
        )
    logger.info("=" * 50)
    return result


def main():
    args = parse_args()
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        talent = load_talent(args)
        if args.mode == "draw":
            draw(talent, args)
        elif args.mode == "replace":
            replace(talent, args)
        else:
            stats(talent, args)
    except TalentError as e:
        logger.error(str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
