#!/usr/bin/env python3

# usage: randomwriter.py <prefix length> <output length> <source> [<source> ...]
#
# learns a character-level markov chain of order <prefix length> from the
# sources (read one after another as a single text) and writes
# <output length> characters of random text to stdout

import codecs
import configparser as cfg
import logging
import os
import random
import re
import sys

from errors import ArgumentError, OrderingError, RandomWriterError
from markov import Markov

MIN_ARGS = 3
CONFIG_ENV = "RANDOMWRITER_CONFIG"
DIGITS = re.compile(r"[+-]?[0-9]+")
MAX_LENGTH = 2 ** 31 - 1

logger = logging.getLogger(__name__)

class Settings:
    def __init__(self, seed = None, encoding = "utf-8", join_lines = False,
        start = None, loglevel = "WARNING"):
        self.seed = seed
        self.encoding = encoding
        self.join_lines = join_lines
        self.start = start
        self.loglevel = loglevel

# read the [randomwriter] section of an ini file.  a missing file or section
# just means defaults
def load_settings(path = None):
    if path is None:
        path = os.environ.get(CONFIG_ENV)

    settings = Settings()
    if not path:
        return settings

    cfgp = cfg.ConfigParser(inline_comment_prefixes = (";",), interpolation = None)
    try:
        cfgp.read(path)
    except cfg.Error as e:
        raise ArgumentError("bad config file " + repr(path) + ": " + str(e)) from e

    if "randomwriter" not in cfgp:
        return settings
    config = cfgp["randomwriter"]

    try:
        if config.get("seed", "").strip():
            settings.seed = config.getint("seed")
        settings.join_lines = config.getboolean("join_lines", False)
        settings.encoding = config.get("encoding", settings.encoding)
        settings.start = config.get("start") or None
        settings.loglevel = config.get("loglevel", settings.loglevel).upper()
    except (ValueError, cfg.Error) as e:
        raise ArgumentError("bad config value: " + str(e)) from e

    try:
        codecs.lookup(settings.encoding)
    except LookupError as e:
        raise ArgumentError("unknown encoding " + repr(settings.encoding)) from e

    if not isinstance(logging.getLevelName(settings.loglevel), int):
        raise ArgumentError("unknown loglevel " + repr(settings.loglevel))

    if settings.start is not None:
        try:
            re.compile(settings.start)
        except re.error as e:
            raise ArgumentError("bad start pattern " + repr(settings.start) + ": " + str(e)) from e

    return settings

def parse_length(arg, name, minimum):
    if not DIGITS.fullmatch(arg):
        raise ArgumentError(name + " must be an integer, not " + repr(arg))
    n = int(arg, 10)

    if n < minimum:
        raise ArgumentError(name + " must be at least " + str(minimum) + ", not " + str(n))
    if n > MAX_LENGTH:
        raise ArgumentError(name + " must be at most " + str(MAX_LENGTH) + ", not " + str(n))

    return n

# turn argv (minus the program name) into (prefix length, output length, sources)
def parse_args(args):
    if len(args) < MIN_ARGS:
        raise ArgumentError("usage: randomwriter <prefix length> <output length> "
            "<source> [<source> ...]")

    prefix_length = parse_length(args[0], "prefix length", 1)
    output_length = parse_length(args[1], "output length", 0)

    if prefix_length > output_length:
        raise OrderingError("prefix length " + str(prefix_length)
            + " is longer than the output length " + str(output_length))

    return prefix_length, output_length, list(args[2:])

def write(prefix_length, output_length, sources, settings):
    rng = random.Random(settings.seed) if settings.seed is not None else random

    mind = Markov(prefix_length)
    for source in sources:
        n = mind.read(source, settings.encoding, settings.join_lines)
        logger.info("read %d characters from %s", n, source)

    keys, ents = mind.size()
    logger.info("model has %d prefixes and %d continuations", keys, ents)

    start = None
    if settings.start:
        start = mind.find_context(settings.start, rng)
        if start is None:
            logger.warning("no prefix matches %r; starting anywhere", settings.start)

    if start is None:
        start = mind.start(rng)

    # collect everything first so a failed run prints nothing
    diag = logger.isEnabledFor(logging.DEBUG)
    text = "".join(mind.gen_out(start, output_length, rng, diag))
    if diag:
        logger.debug("diagnostics: %s", mind.diags)

    return text

def main(argv = None):
    if argv is None:
        argv = sys.argv[1:]

    logging.basicConfig(
        level=logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        settings = load_settings()
        logging.getLogger().setLevel(settings.loglevel)

        prefix_length, output_length, sources = parse_args(argv)
        text = write(prefix_length, output_length, sources, settings)
    except RandomWriterError as e:
        logger.error("%s", e)
        return e.exit_status

    sys.stdout.write(text)
    sys.stdout.flush()
    return 0

if __name__ == "__main__":
    sys.exit(main())
