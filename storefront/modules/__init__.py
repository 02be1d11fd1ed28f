# -*- coding: utf-8 -*-
"""
storefront/modules/__init__.py

Autor: Storefront Payments
Fecha: 02/10/2026
"""
# Fin del archivo storefront/modules/__init__.py
