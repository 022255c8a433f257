"""
sysfetch - Fast System Information Tool

Reports operating system, host, kernel, uptime, shell, CPU and memory facts
next to a distribution logo in a single short run.

Modules:
    - fetcher: Command-line entry point and run orchestration
    - detectors: One detector per reportable module
    - registry: Module identifier to detector mapping
    - scheduler: Sequential and concurrent detector execution
    - aggregator: Detection outcomes to display rows
    - logo: Logo database and column rendering
    - formatter: Final line layout
    - config: Immutable run configuration and its builder
    - utils: Settings file, logging and unit formatting helpers
"""

__version__ = "1.0.0"
__author__ = "sysfetch Contributors"
__license__ = "Apache-2.0"
