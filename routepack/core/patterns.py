"""
Pattern Rewriting

Converts the anchored route regexes produced by the framework into ``src``
expressions for the platform router.
"""

from routepack.config import Config

ROOT_ANCHOR = '^/'


def _strip_delimiters(pattern: str) -> str:
    # "/^\/blog$/" (regex literal) and "^/blog$/" both end in the "$/" marker
    if pattern.startswith('/'):
        pattern = pattern[1:]
    if pattern.endswith('$/'):
        return pattern[:-2]
    if pattern.endswith('$'):
        return pattern[:-1]
    return pattern


def rewrite_pattern(pattern: str, data_suffix: str = Config.Internal.DATA_SUFFIX) -> str:
    """
    Rewrite a route pattern into a platform routing ``src``.

    The rule also matches the route's ``__data.json`` companion path, and
    the root route matches both ``/`` and the empty path.

    Examples:
        >>> rewrite_pattern('^/$/')
        '^/?(?:/__data.json)?$'
        >>> rewrite_pattern('^/blog/post\\\\/1$/')
        '^/blog/post/1(?:/__data.json)?$'
    """
    src = _strip_delimiters(pattern).replace('\\/', '/')

    if src == ROOT_ANCHOR:
        src = '^/?'

    return src + data_suffix
