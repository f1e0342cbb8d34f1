"""Sales domain module: clean the sales log (silver layer)."""

from workforce_core.sales.transform import clean_sales, load_sales

__all__ = ["clean_sales", "load_sales"]
