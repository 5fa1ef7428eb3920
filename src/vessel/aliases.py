"""Alias edges and their memoised terminal keys.

An alias maps one key onto another, which may itself be an alias. The graph
keeps the edges exactly as declared, plus a derived map from every alias to
the terminal key at the end of its chain, so retrieval never walks the chain.

Cycles are an error, never a valid state: they are reported the moment a
chain containing one is resolved.
"""

import logging
from typing import Iterable, Mapping

from vessel.domain import Key
from vessel.errors import CyclicAliasError
from vessel.stores import EntryStores

__all__ = ["AliasGraph"]

logger = logging.getLogger(__name__)


class AliasGraph:
    """Directed alias-to-target edges with resolved terminal keys.

    Edges are declared through :meth:`declare` or in batches through
    :meth:`apply_batch`. After every batch, each alias whose chain may have
    changed is re-resolved, so :attr:`resolved` always reflects the current
    edges.

    Example:
        >>> graph = AliasGraph(EntryStores())
        >>> graph.apply_batch({"a": "b", "b": "c"}, initial=True)
        >>> graph.terminal_key("a")
        'c'
    """

    def __init__(self, stores: EntryStores):
        self._stores = stores
        self.edges: dict[Key, Key] = {}
        self.resolved: dict[Key, Key] = {}

    def __contains__(self, key: Key) -> bool:
        return key in self.edges

    def declare(self, alias: Key, target: Key):
        """Insert or overwrite the edge ``alias -> target``.

        The caller is responsible for re-resolving affected aliases.

        Raises:
            DuplicateInstanceError: If ``alias`` already holds an instance.
        """
        self._stores.assert_no_instance(alias)
        self.edges[alias] = target

    def resolve(self, start_key: Key) -> Key:
        """Walk the edges from ``start_key`` to the end of its chain.

        Returns:
            The first key without an outgoing edge, which is ``start_key``
            itself when it is not an alias. The terminal key need not be
            registered.

        Raises:
            CyclicAliasError: If a key is visited twice during the walk.
        """
        visited: set[Key] = set()
        name = start_key

        while name in self.edges:
            if name in visited:
                raise CyclicAliasError(name)
            visited.add(name)
            name = self.edges[name]

        return name

    def terminal_key(self, key: Key) -> Key:
        """Look up the terminal key for ``key`` without walking when possible.

        An alias missing from :attr:`resolved` is one whose last resolution
        failed; walking it again reports the cycle to the caller.
        """
        if key in self.resolved:
            return self.resolved[key]
        if key in self.edges:
            return self.resolve(key)
        return key

    def recompute(self, aliases: Iterable[Key]):
        """Re-resolve the given aliases, storing their terminal keys.

        Raises:
            CyclicAliasError: If any of the chains is cyclic.
        """
        for alias in list(aliases):
            self.resolved[alias] = self.resolve(alias)

    def apply_batch(self, aliases: Mapping[Key, Key], initial: bool = False):
        """Declare a batch of aliases and bring resolved keys up to date.

        On the initial pass every alias is resolved. Later passes re-resolve
        the whole graph when the batch chains into itself or re-points an
        existing alias, since either may change chains declared earlier.
        Otherwise only the new aliases are resolved, and earlier aliases
        whose terminal key is now one of the new aliases are redirected to
        that alias's own terminal key.

        Raises:
            DuplicateInstanceError: If an alias key already holds an instance.
            CyclicAliasError: If the batch introduces a cycle.
        """
        if initial:
            for alias, target in aliases.items():
                self.declare(alias, target)
            self._recompute_or_rebuild(self.edges)
            logger.debug("Resolved %d aliases on initial configuration", len(self.edges))
            return

        intersecting = any(target in aliases for target in aliases.values())
        repointed = any(alias in self.edges for alias in aliases)

        for alias, target in aliases.items():
            self.declare(alias, target)

        if intersecting or repointed:
            logger.debug(
                "Alias batch %s, re-resolving all %d aliases",
                "chains into itself" if intersecting else "re-points existing aliases",
                len(self.edges),
            )
            self._recompute_or_rebuild(self.edges)
            return

        self._recompute_or_rebuild(aliases)

        patched = 0
        for alias, terminal in self.resolved.items():
            if terminal in aliases:
                self.resolved[alias] = self.resolved[terminal]
                patched += 1

        logger.debug("Resolved %d new aliases, redirected %d existing", len(aliases), patched)

    def _recompute_or_rebuild(self, aliases: Iterable[Key]):
        try:
            self.recompute(aliases)
        except CyclicAliasError:
            self._rebuild_acyclic()
            raise

    def _rebuild_acyclic(self):
        """Re-resolve every alias, leaving cyclic chains unresolved.

        Unresolved aliases are walked on lookup, so the cycle is reported
        again to every caller that touches it.
        """
        self.resolved.clear()
        for alias in self.edges:
            try:
                self.resolved[alias] = self.resolve(alias)
            except CyclicAliasError:
                logger.debug("Alias '%s' left unresolved: chain is cyclic", alias)
