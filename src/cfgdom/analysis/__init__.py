"""Analysis modules for cfgdom."""
