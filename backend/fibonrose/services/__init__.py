"""FibonRose - Trust & Resource Scoring Services"""
