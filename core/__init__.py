"""Stepwise graph-algorithm engine"""
