'''Result cache for repeated spatial computations.

Yee diagrams and perturbation maps are expensive to compute and are often
requested again for the same setup, e.g. when a candidate is dragged back to
where it was. A :class:`ResultCache` stores computed results under
a canonical key built from the setup by :meth:`ResultCache.make_key`.
The cache is an ordinary object; pass it to the functions that should use it.
'''

import hashlib
import json
import logging
from typing import Any, Callable, Dict, Hashable, Optional, Sequence, Tuple

from votetally.candidate import SpatialCandidate


logger = logging.getLogger(__name__)

KEY_PRECISION = 2


class ResultCache:
    '''An in-memory store of computed results.

    :param max_size: Maximum number of results to keep. When exceeded, the
        oldest stored result is dropped. Unlimited by default.
    '''
    def __init__(self, max_size: Optional[int] = None):
        self.max_size = max_size
        self._store: Dict[Hashable, Any] = {}

    @staticmethod
    def make_key(candidates: Sequence[SpatialCandidate],
                 method: str,
                 threshold: float,
                 **extra: Any) -> str:
        '''Build a canonical cache key for a spatial computation setup.

        Candidate positions are rounded to two decimals so that nearly equal
        setups share a key.

        :param candidates: Candidates with positions.
        :param method: Voting method identifier.
        :param threshold: Approval threshold.
        :param extra: Further setup values distinguishing the results,
            such as the grid resolution. Must be JSON-serializable.
        '''
        return json.dumps({
            'candidates': [
                [
                    cand.id,
                    round(cand.x, KEY_PRECISION),
                    round(cand.y, KEY_PRECISION),
                ]
                for cand in candidates
            ],
            'method': str(getattr(method, 'value', method)),
            'threshold': threshold,
            **extra
        }, sort_keys=True)

    def get(self, key: Hashable, default: Any = None) -> Any:
        return self._store.get(key, default)

    def set(self, key: Hashable, value: Any) -> None:
        self._store.pop(key, None)
        self._store[key] = value
        if self.max_size is not None and len(self._store) > self.max_size:
            oldest = next(iter(self._store))
            del self._store[oldest]
            logger.debug('cache full, dropped %s', oldest)

    def get_or_compute(self,
                       key: Hashable,
                       compute: Callable[[], Any],
                       ) -> Any:
        '''Return the result stored under the key, computing it if missing.'''
        if key in self._store:
            logger.debug('cache hit: %s', key)
            return self._store[key]
        logger.debug('cache miss: %s', key)
        value = compute()
        self.set(key, value)
        return value

    def clear(self) -> None:
        self._store.clear()

    def __len__(self) -> int:
        return len(self._store)

    def __contains__(self, key: Hashable) -> bool:
        return key in self._store


def position_digest(positions: Sequence[Tuple[float, float]],
                    precision: int = 4,
                    ) -> str:
    '''Summarize voter positions into a short string usable in cache keys.'''
    return hashlib.sha1(json.dumps([
        [round(pos[0], precision), round(pos[1], precision)]
        for pos in positions
    ]).encode('utf8')).hexdigest()
