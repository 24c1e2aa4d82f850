"""quant_optimizer — optimization target tracking over backtest results."""

__version__ = "0.1.0"
