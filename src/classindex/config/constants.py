"""Configuration constants.

Values here are a contract with runtime readers of the generated files and
must NOT be user-configurable.
"""

# =============================================================================
# Generated Resource Paths
# =============================================================================
# All paths are relative to the build output root. The three index kinds
# live in disjoint namespaces.

ANNOTATED_INDEX_PREFIX = "META-INF/annotated/"
"""Prefix of annotation indexes, followed by the annotation qualified name."""

SUBCLASS_INDEX_PREFIX = "META-INF/subclasses/"
"""Prefix of subclass indexes, followed by the superclass qualified name."""

PACKAGE_INDEX_NAME = "jbossindex"
"""File name of the per-package index inside the package directory."""

DOCUMENTATION_PREFIX = "META-INF/javadocs/"
"""Prefix of documentation sidecars, followed by the type qualified name."""

INDEX_ENCODING = "utf-8"
"""Encoding of every generated resource."""

# =============================================================================
# Marker Names
# =============================================================================
# Qualified names of the decorators in classindex.markers, as the source
# adapter resolves them.

INDEX_ANNOTATED_MARKER = "classindex.markers.index_annotated"
INDEX_SUBCLASSES_MARKER = "classindex.markers.index_subclasses"
INHERITED_MARKER = "classindex.markers.inherited"

STORE_DOCS_OPTION = "store_docs"
"""Marker keyword requesting documentation sidecars for indexed members."""

# =============================================================================
# Project Files
# =============================================================================

CONFIG_FILE_NAME = "classindex.yaml"
"""Project-level YAML config, looked up in the project root."""

ENV_PREFIX = "CLASSINDEX__"
