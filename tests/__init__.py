"""
Test suite for the htmlquill project.

This module contains all unit tests for the htmlquill package.
"""
