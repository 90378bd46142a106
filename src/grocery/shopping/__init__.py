"""Shopping list pipeline: extract, parse, normalize, aggregate, reconcile, format."""
