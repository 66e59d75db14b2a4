"""Dispatch Control package.

Warehouse dispatch backend organised by feature modules (users, sessions,
reconciliation, orders, remitos, ...) with a thin Flask controller layer on
top of service/repository layers.
"""
