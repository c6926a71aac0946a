"""
Error handling for cfgdom.

This module defines the exception classes raised while reading a CFG spec,
configuring an analysis, and querying dominator results.

Dangling successor/predecessor references have no exception class: blocks
only ever refer to each other through indices handed out by the registry,
so such a reference cannot be constructed.
"""


class CfgDomError(Exception):
    """Base class for all errors raised by cfgdom."""
    pass


class UnknownBlock(CfgDomError, KeyError):
    """
    Exception raised when querying a block id that was never registered.

    Unreachable blocks are *known* blocks; querying them does not raise,
    it yields an empty dominator set instead.

    Attributes:
        blockID: The external id that was looked up
    """

    def __init__(self, blockID):
        super().__init__(blockID)
        self.blockID = blockID

    def __str__(self):
        return "unknown basic block %r" % (self.blockID,)


class SpecSyntaxError(CfgDomError, ValueError):
    """
    Exception raised for a malformed line in a textual CFG spec.

    Attributes:
        lineno: 1-based line number, or None when parsing a lone line
        token: The offending token, or the raw bytes of an undecodable line
        reason: What was wrong with the token
    """

    def __init__(self, token, lineno=None, reason="invalid block id"):
        self.token = token
        self.lineno = lineno
        self.reason = reason
        msg = "%s %r" % (reason, token)
        if lineno is not None:
            msg = "line %d: %s" % (lineno, msg)
        super().__init__(msg)


class ConfigError(CfgDomError, ValueError):
    """Exception raised for an invalid analysis option."""
    pass


class InternalError(CfgDomError):
    """
    Exception raised for internal errors in cfgdom.

    This indicates a broken invariant inside the analysis (or an exceeded
    pass cap), as opposed to a problem with the user's input.
    """
    pass


class AnalysisAbort(Exception):
    """
    Exception raised to abort an analysis run.

    Used by the command line front end to stop early after reporting a
    problem; callers that drive the analysis directly never see it.
    """
    pass


def abort(msg=None):
    """
    Abort the current run with an optional message.

    Raises:
        AnalysisAbort: Always raises this exception
    """
    raise AnalysisAbort(msg)
