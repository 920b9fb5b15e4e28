"""
Java Declaration Tree.

This package provides a pure Python representation of the declaration
skeleton of a Java compilation unit. Nodes record source spans so that staged
edits can be committed as text replacements that keep surrounding formatting.
"""
