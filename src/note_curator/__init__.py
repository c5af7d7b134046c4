"""Note curation: deduplicate extracted lesson notes and keep the best ones.

Pipeline: group similar notes, pick one representative per group, score
representatives and keep the top K.
"""

__all__ = [
    "ingest",
    "normalize",
    "keywords",
    "similarity",
    "cluster",
    "quality",
    "ranking",
    "cache",
    "pipeline",
    "report",
]
