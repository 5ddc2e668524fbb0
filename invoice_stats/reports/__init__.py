"""
Reports Module
Dashboard statistics over invoices and quotations.
"""
