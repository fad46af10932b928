from netbrandes.algos import brandes, centrality

__all__ = ["brandes", "centrality"]
