from bill_text_core.sources.gpo import GpoLayout

__all__ = ["GpoLayout"]
