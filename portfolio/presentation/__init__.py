"""Console presentation of the portfolio."""
