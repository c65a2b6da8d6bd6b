"""PriceCompare backend -- price aggregation for Indian e-commerce sites."""

__version__ = "0.1.0"
