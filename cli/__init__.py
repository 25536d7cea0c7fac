"""Console front end for the Twenty-One engine."""
