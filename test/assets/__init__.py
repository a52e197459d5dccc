"""
Classes used as conversion subjects in tests.
"""
