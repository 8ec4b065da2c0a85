"""
Unit Tests for the Minimax Engine

This package contains unit tests for all engine components.

Running Tests:
    # Run all tests
    pytest tests/

    # Run specific test file
    pytest tests/test_minimax.py

    # Run with coverage
    pytest tests/ --cov=minimax_engine --cov-report=html

    # Run specific test
    pytest tests/test_score.py::TestTimedScore::test_faster_win_preferred

Dependencies:
    - pytest: Test framework
    - pytest-cov: Coverage reporting
"""
