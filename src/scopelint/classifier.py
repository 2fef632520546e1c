"""Token classifier: map a class name onto its convention role."""

from __future__ import annotations

from scopelint.config import ConventionConfig
from scopelint.model.token import ClassToken, ContainerKind, TokenKind

__all__ = ["classify", "Classifier"]


def _longest_match(name: str, prefixes) -> str | None:
    best: str | None = None
    for prefix in prefixes:
        if prefix and name.startswith(prefix):
            if best is None or len(prefix) > len(best):
                best = prefix
    return best


def classify(name: str, config: ConventionConfig) -> ClassToken:
    """Classify a single class name.

    Resolution order: longest Container prefix, then longest Modifier prefix,
    then the Private prefix.  Anything else is Unclassified.  Never raises.
    """
    prefix = _longest_match(name, config.container_prefixes)
    if prefix is not None:
        return ClassToken(
            name=name,
            kind=TokenKind.CONTAINER,
            container_kind=ContainerKind.parse(config.container_prefixes[prefix]),
            prefix=prefix,
        )
    prefix = _longest_match(name, config.modifier_prefixes)
    if prefix is not None:
        return ClassToken(name=name, kind=TokenKind.MODIFIER, prefix=prefix)
    if config.private_prefix and name.startswith(config.private_prefix):
        return ClassToken(name=name, kind=TokenKind.PRIVATE, prefix=config.private_prefix)
    return ClassToken(name=name, kind=TokenKind.UNCLASSIFIED)


class Classifier:
    """Memoizing wrapper around :func:`classify` bound to one config."""

    def __init__(self, config: ConventionConfig | None = None) -> None:
        self.config = config or ConventionConfig()
        self._cache: dict[str, ClassToken] = {}

    def __call__(self, name: str) -> ClassToken:
        token = self._cache.get(name)
        if token is None:
            token = classify(name, self.config)
            self._cache[name] = token
        return token

    def tokens(self, names) -> tuple[ClassToken, ...]:
        return tuple(self(n) for n in names)
