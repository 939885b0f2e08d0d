"""Core primitives: the dual-view window, pair-sum strategies, the stream validator.

A value past warm-up is valid when two distinct elements of the recent window
sum to it. The window keeps its elements sorted so that check is a linear
two-pointer scan.
"""
