from .spreadsheet_analyzer import analyze_bytes, analyze_file, analyze_workbook
from .workbook_reader import load_workbook_bytes, read_upload
