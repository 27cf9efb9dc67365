"""colour_swatch.core — Foundation layer.

Contains the colour literal scanner, channel arithmetic, type definitions,
swatch rendering, editor bookkeeping and the report builder.
This module has NO dependencies on colour_swatch.commands or colour_swatch.registry.
Only stdlib, numpy, and PIL are allowed here.
"""
