"""
geoclient: clients for geocoding web services.
"""
