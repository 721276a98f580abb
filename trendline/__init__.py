"""TrendLine: composable betting trend queries over historical games."""
