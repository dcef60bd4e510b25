"""
Test suite for PyFastResample package.

This test suite covers:
- Import tests for all modules and submodules
- Unit tests for kernels, colour conversion, 1D resampling, resize and reduce
- Integration tests for file-based workflows and the CLI

Run with: pytest
"""
