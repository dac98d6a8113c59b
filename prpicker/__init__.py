"""prpicker: browse your GitHub pull requests in fzf."""

__version__ = "0.1.0"
