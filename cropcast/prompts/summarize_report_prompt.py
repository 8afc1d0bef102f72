SUMMARIZE_REPORT_PROMPT = """
You are an expert agricultural researcher. Please summarize the following report, highlighting the key findings and conclusions.

Report:
{reportText}
"""
