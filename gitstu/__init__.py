"""gitstu: declarative helper for git subtrees."""

__version__ = '0.0.1'
