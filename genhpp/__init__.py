"""
GenHPP - HPP calculator and business toolkit for Indonesian micro-entrepreneurs

Backend API with:
- HPP (Harga Pokok Produksi) and pricing calculators
- Expense tracking and monthly profit reports
- Community feed with threaded comments
- Anonymous 1:1 chat matchmaking
- Gemini-backed AI business assistants
"""

__version__ = "1.0.0"
__author__ = "GenHPP Contributors"
