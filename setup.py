from setuptools import setup, find_packages

__package_name__ = "petriforge"
__description__ = "This package provides methods to build, fire, analyze and lay out place/transition Petri nets, with a focus on structural analysis via circuits and handles."

__version__ = open("petriforge/_version.py", "rt").read().split('\'')[1]

setup(
      name = __package_name__,
      version = __version__,
      description = __description__,
      long_description = __description__,

      license = "MIT",

      packages = find_packages(exclude=["tests", "tests.*"]),

      classifiers = [
          "Programming Language :: Python :: 3",
      ],

      install_requires = [
          "numpy",
          "networkx",
      ],

      extras_require = {
          "plot": ["matplotlib"],
          "test": ["pytest", "matplotlib"],
          "docs": ["sphinx", "sphinx_rtd_theme"],
      }
)
