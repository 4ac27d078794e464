"""
Nitya Analytics Test Suite

Test Structure:
    tests/
    ├── conftest.py                    # Shared fixtures (sample logs, record factories)
    └── unit/
        ├── test_config.py             # Settings and YAML loading
        ├── test_date_range.py         # Date sequences and presets
        ├── test_projector.py          # Sparse log → DayRecord projection
        ├── test_criteria.py           # Success criteria and buckets
        ├── test_aggregation.py        # Summary and subject/topic rollups
        ├── test_streaks.py            # Streak detection
        └── test_analytics_service.py  # End-to-end pipeline

Running Tests:
    # Run all tests
    pytest backend/tests/ -v
"""
