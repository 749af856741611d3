"""
AEM Component Generator.

Generates Adobe Experience Manager component boilerplate from a component
type and authored field values.
"""

__version__ = "0.1.0"
