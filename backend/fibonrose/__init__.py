"""FibonRose - Fibonacci trust, resource and protection engine"""

__version__ = "1.0.0"
