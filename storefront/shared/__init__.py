# -*- coding: utf-8 -*-
"""
storefront/shared/__init__.py

Infraestructura compartida: configuración, base de datos, HTTP y middlewares.

Autor: Storefront Payments
Fecha: 02/10/2026
"""
# Fin del archivo storefront/shared/__init__.py
