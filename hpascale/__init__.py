"""
hpascale
Adjust HorizontalPodAutoscaler bounds with relative size expressions
"""

__version__ = "0.1.0"
