from compression_eval.compressors.base import Compressor
from compression_eval.compressors.registry import COMPRESSOR_REGISTRY, make_compressor

__all__ = ["Compressor", "COMPRESSOR_REGISTRY", "make_compressor"]
