"""Built-in instrument table used when no catalog is configured.

Eighteen large-cap stocks across six sectors. Order matters: allocation
picks instruments in this order.
"""

DEFAULT_INSTRUMENTS = [
    # Technology
    {"symbol": "AAPL", "name": "Apple Inc.", "price": 178.50, "change": 1.2, "sector": "technology", "volatility": 0.3, "dividend_yield": 0.5},
    {"symbol": "MSFT", "name": "Microsoft Corp.", "price": 378.25, "change": 0.8, "sector": "technology", "volatility": 0.25, "dividend_yield": 0.8},
    {"symbol": "GOOGL", "name": "Alphabet Inc.", "price": 141.80, "change": -0.5, "sector": "technology", "volatility": 0.35, "dividend_yield": 0.0},
    {"symbol": "NVDA", "name": "NVIDIA Corp.", "price": 495.20, "change": 2.5, "sector": "technology", "volatility": 0.5, "dividend_yield": 0.04},
    {"symbol": "META", "name": "Meta Platforms", "price": 505.30, "change": 1.8, "sector": "technology", "volatility": 0.45, "dividend_yield": 0.4},
    # Healthcare
    {"symbol": "JNJ", "name": "Johnson & Johnson", "price": 156.40, "change": 0.3, "sector": "healthcare", "volatility": 0.15, "dividend_yield": 3.0},
    {"symbol": "UNH", "name": "UnitedHealth Group", "price": 528.90, "change": -0.2, "sector": "healthcare", "volatility": 0.2, "dividend_yield": 1.4},
    {"symbol": "PFE", "name": "Pfizer Inc.", "price": 27.15, "change": -1.5, "sector": "healthcare", "volatility": 0.3, "dividend_yield": 5.8},
    # Finance
    {"symbol": "JPM", "name": "JPMorgan Chase", "price": 195.60, "change": 0.9, "sector": "finance", "volatility": 0.25, "dividend_yield": 2.4},
    {"symbol": "BAC", "name": "Bank of America", "price": 33.80, "change": 1.1, "sector": "finance", "volatility": 0.3, "dividend_yield": 2.8},
    {"symbol": "V", "name": "Visa Inc.", "price": 279.45, "change": 0.6, "sector": "finance", "volatility": 0.2, "dividend_yield": 0.8},
    # Energy
    {"symbol": "XOM", "name": "Exxon Mobil", "price": 104.25, "change": -0.8, "sector": "energy", "volatility": 0.35, "dividend_yield": 3.5},
    {"symbol": "CVX", "name": "Chevron Corp.", "price": 151.70, "change": -0.4, "sector": "energy", "volatility": 0.3, "dividend_yield": 4.0},
    # Consumer
    {"symbol": "AMZN", "name": "Amazon.com", "price": 178.90, "change": 1.5, "sector": "consumer", "volatility": 0.35, "dividend_yield": 0.0},
    {"symbol": "WMT", "name": "Walmart Inc.", "price": 163.20, "change": 0.4, "sector": "consumer", "volatility": 0.15, "dividend_yield": 1.4},
    {"symbol": "KO", "name": "Coca-Cola Co.", "price": 60.85, "change": 0.2, "sector": "consumer", "volatility": 0.1, "dividend_yield": 3.1},
    # Industrial
    {"symbol": "CAT", "name": "Caterpillar Inc.", "price": 345.60, "change": 0.7, "sector": "industrial", "volatility": 0.25, "dividend_yield": 1.6},
    {"symbol": "BA", "name": "Boeing Co.", "price": 198.30, "change": -1.2, "sector": "industrial", "volatility": 0.4, "dividend_yield": 0.0},
]
