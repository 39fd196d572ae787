"""Exception hierarchy for blogpipe.

Run-level failures raise one of these; item-level failures are handled
where they happen and never reach the pipeline as exceptions.
"""


class BlogPipeError(Exception):
    """Base exception for all blogpipe errors."""


class ConfigError(BlogPipeError):
    """Configuration is invalid or a required credential is missing."""


class CrawlError(BlogPipeError):
    """The blog index or its boundary page could not be crawled."""


class RewriteError(BlogPipeError):
    """The generative model call failed."""


class NavigationError(BlogPipeError):
    """A page could not be loaded in the browser."""
