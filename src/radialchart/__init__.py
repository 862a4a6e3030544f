"""
Radial layered chart: six category scores drawn as partially filled
concentric tiers, with optional benchmark, average marker and value labels.
"""
