"""
rankmerge command-line layer.

TREC run file I/O, strategy name registry and the ``rankmerge`` command.

License: MIT
"""
