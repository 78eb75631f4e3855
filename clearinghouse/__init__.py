"""In-memory perpetual-futures clearing house: exchange state, AMM markets, oracle scaling, margin checks and record histories."""

__version__ = "0.1.0"