"""Performance benchmarks for inexactvi.

Microbenchmarks for the conditional gradient projection engine and the
outer extragradient loops.
"""
