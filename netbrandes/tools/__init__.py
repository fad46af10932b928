from netbrandes.tools import graphs, mock

__all__ = ["graphs", "mock"]
