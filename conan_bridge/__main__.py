"""Allows ``python -m conan_bridge``"""

from .main import main

main()
