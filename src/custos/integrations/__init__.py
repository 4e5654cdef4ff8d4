"""Adapters that expose Custos stores to host frameworks"""
