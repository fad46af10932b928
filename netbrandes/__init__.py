from netbrandes import algos, config, errors, metrics, structures, tools

__all__ = ["algos", "metrics", "tools", "config", "errors", "structures"]
