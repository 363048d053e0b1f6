"""Work clustering.

Groups consolidated records believed to represent the same literary work,
using title similarity, core-title overlap and publisher consistency.
"""

from bookrecon.clustering.title_clusterer import cluster, should_join

__all__ = [
    "cluster",
    "should_join",
]
