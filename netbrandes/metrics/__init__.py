from netbrandes.metrics import betweenness

__all__ = ["betweenness"]
