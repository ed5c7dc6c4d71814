"""Namespace for response renderers; it currently holds no modules."""