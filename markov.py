#!/usr/bin/env python3

import random
import re

from errors import EmptyModelError, IOReadError, ModelLookupError, OrderingError

# add every (prefix, next character) window of text to model.  model is any
# dict from prefix strings to lists of characters; it's updated in place and
# handed back so calls can be chained over several texts
def extend(model, text, context):
    for i in range(len(text) - context):
        model.setdefault(text[i:i + context], []).append(text[i + context])

    return model

# generate length characters from a bare model dictionary
def generate(model, context, length, rng = None):
    return Markov(context, model).gen(length, rng)

# diagnostic class for useful information on markov-generating
class Diagnostics:
    def __init__(self, porb, branches):
        self.porb = porb
        self.branches = branches

    def __str__(self):
        return str(self.porb) + " / " + str(self.branches)

class Markov:
    """A character-level Markov chain of fixed order.

    ``context`` is the prefix length.  ``ldict`` maps every prefix seen in
    the learned text to the list of characters that followed it, one entry
    per occurrence, so ``random.choice`` over the list samples by observed
    frequency.

    Texts passed to ``learn`` are treated as one concatenated corpus: the
    windows that straddle the join between two texts are recorded too.
    """

    def __init__(self, context, ldict = None):
        if ldict is None:
            ldict = {}
        self.context = context
        self.ldict = ldict
        self.tail = ""   # last [context] characters of the corpus so far
        self.diags = None

    def __len__(self):
        return len(self.ldict)

    # how big the mind is: (number of prefixes, number of continuations)
    def size(self):
        keys = 0
        ents = 0
        for k in self.ldict:
            keys += 1
            ents += len(self.ldict[k])

        return keys, ents

    # add a chunk of text to the dictionary
    def learn(self, text):
        data = self.tail + text
        extend(self.ldict, data, self.context)
        self.tail = data[-self.context:]

    # learn a whole file.  with join_lines, line terminators are dropped and
    # the lines run together
    def read(self, path, encoding = "utf-8", join_lines = False):
        try:
            with open(path, "r", encoding = encoding, newline = "") as f:
                if join_lines:
                    text = "".join(line.rstrip("\r\n") for line in f)
                else:
                    text = f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise IOReadError(path, e) from e

        self.learn(text)
        return len(text)

    # random prefix containing a match for regex, or None if there isn't one
    def find_context(self, regex, rng = None):
        if rng is None:
            rng = random

        ks = sorted(self.ldict.keys())
        rng.shuffle(ks)

        pattern = re.compile(regex)
        for k in ks:
            if pattern.search(k):
                return k

        return None

    def start(self, rng = None):
        if rng is None:
            rng = random

        # sorted so a seeded rng picks the same start whatever order the
        # dictionary was filled in
        ks = sorted(self.ldict.keys())
        if not ks:
            raise EmptyModelError("the model is empty; every source is shorter than "
                + str(self.context + 1) + " characters")

        return rng.choice(ks)

    def gen(self, length, rng = None, diag = False):
        # pick the start eagerly so an empty model fails at the call site
        return self.gen_out(self.start(rng), length, rng, diag)

    # with diag, self.diags is filled in once the walk finishes
    def gen_out(self, start_k, length, rng = None, diag = False):
        if len(start_k) > length:
            raise OrderingError("prefix length " + str(len(start_k))
                + " is longer than the output length " + str(length))

        return self._walk(start_k, length, rng, diag)

    def _walk(self, start_k, length, rng, diag):
        if rng is None:
            rng = random

        porb = 1.0
        branches = 0
        self.diags = None

        # yield everything in initial [k]ontext
        yield from start_k

        k = start_k
        for _ in range(length - len(start_k)):
            possibs = self.ldict.get(k)
            if not possibs:
                raise ModelLookupError(k)

            next = rng.choice(possibs)

            # diagnostics.  these scan the whole list, so only when asked
            if diag:
                porb *= possibs.count(next) / len(possibs)
                if len(set(possibs)) > 1:
                    branches += 1

            yield next
            k = k[1:] + next

        if diag:
            self.diags = Diagnostics(porb, branches)
