"""
tweetchain: first-order Markov chain sentence generator for short text samples.
"""

__version__ = "1.0.0"
