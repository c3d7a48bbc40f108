"""Allows running the environment tool as a module"""
from .main import main

if __name__ == "__main__":
    main()
