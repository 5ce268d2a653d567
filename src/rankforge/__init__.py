"""Editor core for rank progression hierarchies and their ``Ranks.xml`` file."""

__version__ = "0.1.0"
