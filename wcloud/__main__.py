"""Command line interface: ``python -m wcloud --text speech.txt -o cloud.png``."""

import argparse
import logging
import re
import sys
from typing import List, Optional

from PIL import Image, ImageColor

from .config import WordCloudConfig
from .errors import WordCloudError
from .tokenizer import Tokenizer
from .wordcloud import WordCloud

logger = logging.getLogger("wcloud")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="wcloud", description="Generate a word cloud image.")
    parser.add_argument("-t", "--text", help="Text file to build the word cloud from (default: stdin)")
    parser.add_argument("--regex", help="Custom regex to tokenize words with")
    parser.add_argument("--width", type=int, default=400, help="Width of the word cloud")
    parser.add_argument("--height", type=int, default=200, help="Height of the word cloud")
    parser.add_argument("--scale", type=float, default=1.0,
                        help="Scale of the final image, relative to width and height")
    parser.add_argument("--background", help="Background color (default: transparent)")
    parser.add_argument("--margin", type=int, help="Spacing between words")
    parser.add_argument("--max-words", type=int, help="Maximum number of words to display")
    parser.add_argument("--min-font-size", type=float, help="Minimum font size for words")
    parser.add_argument("--max-font-size", type=float, help="Maximum font size for words")
    parser.add_argument("--random-seed", type=int, help="Seed for reproducible word clouds")
    parser.add_argument("--repeat", action="store_true",
                        help="Repeat words until the maximum word count is reached")
    parser.add_argument("--font-step", type=float,
                        help="Font size decrease when no space can be found for a word")
    parser.add_argument("--rotate-chance", type=float,
                        help="Chance that a word is rotated, 0.0 - 1.0 [0.1]")
    parser.add_argument("--relative-scaling", type=float,
                        help="Impact of word frequency on font size, 0.0 - 1.0 [0.5]")
    parser.add_argument("--mask",
                        help="Mask image for the word cloud shape. Any color other than "
                             "black (#000) means there is no space")
    parser.add_argument("--exclude-words", help="Newline-separated list of words to exclude")
    parser.add_argument("-o", "--output", help="Output file (default: PNG on stdout)")
    parser.add_argument("-f", "--font", help="Font file used for the word cloud")
    parser.add_argument("--format", choices=("png", "svg"),
                        help="Output format (default: from the output extension, else png)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log placement details")
    return parser


def _parse_background(value: Optional[str]):
    if value is None:
        return (0, 0, 0, 0)
    try:
        return ImageColor.getrgb(value)
    except ValueError:
        logger.warning("Unknown background color %r, using black", value)
        return (0, 0, 0, 255)


def _config_from_args(args) -> WordCloudConfig:
    overrides = {
        "margin": args.margin,
        "max_words": args.max_words,
        "min_font_size": args.min_font_size,
        "max_font_size": args.max_font_size,
        "random_seed": args.random_seed,
        "font_step": args.font_step,
        "rotate_chance": args.rotate_chance,
        "relative_scaling": args.relative_scaling,
    }
    return WordCloudConfig(
        scale=args.scale,
        repeat=args.repeat,
        background_color=_parse_background(args.background),
        **{k: v for k, v in overrides.items() if v is not None},
    )


def _read_text(path: Optional[str]) -> str:
    if path is None:
        return sys.stdin.read()
    with open(path, encoding="utf-8") as f:
        return f.read()


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")
    try:
        config = _config_from_args(args)
        exclude_words = None
        if args.exclude_words is not None:
            exclude_words = _read_text(args.exclude_words).splitlines()
        tokenizer = Tokenizer(regex=args.regex, exclude_words=exclude_words,
                              max_words=config.max_words, repeat=config.repeat)
        mask = Image.open(args.mask).convert("L") if args.mask else None

        cloud = WordCloud(config, font_path=args.font, tokenizer=tokenizer)
        result = cloud.generate_from_text(_read_text(args.text), args.width, args.height, mask)

        if args.output:
            result.to_file(args.output, args.format)
        elif args.format == "svg":
            sys.stdout.write(result.to_svg())
        else:
            result.to_image().save(sys.stdout.buffer, format="PNG")
    except (WordCloudError, OSError, re.error) as exc:
        print("wcloud: %s" % exc, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
