"""Operations on YAML node trees that keep tags, styles, anchors and comments."""

__version__ = "0.1.0"