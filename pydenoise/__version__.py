version = '0.1.0'
time = '2026-10-19 11:00:00'
