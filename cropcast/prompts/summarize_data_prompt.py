SUMMARIZE_DATA_PROMPT = """
You are an expert data analyst. You will be given a large dataset of agricultural data in CSV format.
Your task is to provide a very concise summary of the key statistical properties of this data. Do not output the raw data.
Focus on:
1.  Overall dataset size (rows, columns).
2.  For each numerical column (like temperature, rainfall, yield, soil metrics): calculate the mean, median, standard deviation, min, and max.
3.  Identify the time period covered by the data if available.
4.  Briefly mention any obvious strong positive or negative correlations between columns (e.g., "rainfall is positively correlated with yield").
Keep the entire summary under 500 words. This summary will be used by another AI to predict future yield, so only include the most critical information for that task.

Data:
{agriculturalData}
"""
