from .pdf_report import ReportContent, build_report_content, render_report_pdf, report_filename
