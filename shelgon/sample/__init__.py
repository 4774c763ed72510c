"""Sample executors"""
