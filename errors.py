# everything that can end a run early.  each error knows the exit status the
# command line should report for it; only randomwriter.main ever exits.

class RandomWriterError(Exception):
    exit_status = 1

# malformed or out of range lengths, too few sources, bad config values
class ArgumentError(RandomWriterError):
    exit_status = 1

# prefix length longer than the requested output
class OrderingError(RandomWriterError):
    exit_status = 2

# a source couldn't be opened or decoded
class IOReadError(RandomWriterError):
    exit_status = 1

    def __init__(self, path, reason):
        super(IOReadError, self).__init__("can't read " + repr(path) + ": " + str(reason))
        self.path = path
        self.reason = reason

# the generator walked onto a prefix nobody ever saw a continuation for
class ModelLookupError(RandomWriterError):
    exit_status = 2

    def __init__(self, prefix):
        super(ModelLookupError, self).__init__("no continuations for prefix " + repr(prefix))
        self.prefix = prefix

# every source was too short to teach the model anything
class EmptyModelError(RandomWriterError):
    exit_status = 1
