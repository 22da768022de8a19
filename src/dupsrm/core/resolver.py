"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/resolver.py
Matches reference-tree digests against root-tree digests.

Digest equality is the only matching criterion: no size or mtime check is made.
The collision risk is therefore that of the selected algorithm, negligible for
the cryptographic ones and real for legacy digests and checksums.
"""

import logging
from typing import List

from dupsrm.core.interfaces import DuplicateResolver
from dupsrm.core.models import DigestMap, DuplicateCandidate

logger = logging.getLogger(__name__)


class DuplicateResolverImpl(DuplicateResolver):

    def resolve(self, reference_map: DigestMap, root_map: DigestMap) -> List[DuplicateCandidate]:
        """
        Every reference path whose digest is present in the root map is a candidate,
        however many root paths share that digest.
        Returns:
            Candidates sorted by reference path
        """
        candidates = []
        for digest in reference_map.digests():
            if digest not in root_map:
                continue
            matched_path = root_map.paths_for(digest)[0]
            for path in reference_map.paths_for(digest):
                candidates.append(DuplicateCandidate(path=path, digest=digest, matched_path=matched_path))

        candidates.sort(key=lambda c: c.path)
        logger.debug(f"Resolved {len(candidates)} duplicate candidates")
        return candidates
