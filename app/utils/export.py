"""
Utility functions for exporting data to CSV format.
Used by HR to export saved-course reviews and internal job applications.
"""

import csv
import io
from typing import List, Dict, Any
from datetime import datetime


def _format_date(value: Any, fmt: str = '%Y-%m-%d %H:%M:%S') -> str:
    return value.strftime(fmt) if isinstance(value, datetime) else ''


def export_saved_courses_to_csv(courses: List[Dict[str, Any]]) -> str:
    """
    Export saved courses (with their owner) to CSV format.

    Args:
        courses: List of saved course dictionaries carrying `employee_info`

    Returns:
        CSV string ready to be downloaded
    """

    output = io.StringIO()

    fieldnames = [
        'Course ID',
        'Employee Name',
        'Employee Email',
        'Department',
        'Title',
        'Provider',
        'Cost Type',
        'Status',
        'Verified',
        'Saved Date',
        'Proof Submitted',
        'Proof File',
        'Proof Link',
        'Review Notes'
    ]

    writer = csv.DictWriter(output, fieldnames=fieldnames)
    writer.writeheader()

    for course in courses:
        info = course.get('employee_info') or {}
        proof = course.get('completion_proof') or {}
        review = course.get('review') or {}
        writer.writerow({
            'Course ID': course.get('id', ''),
            'Employee Name': info.get('full_name', ''),
            'Employee Email': info.get('email', ''),
            'Department': info.get('department', ''),
            'Title': course.get('title', ''),
            'Provider': course.get('provider', ''),
            'Cost Type': course.get('cost_type', ''),
            'Status': course.get('status', ''),
            'Verified': 'Yes' if course.get('verified') else 'No',
            'Saved Date': _format_date(course.get('saved_at')),
            'Proof Submitted': _format_date(proof.get('submitted_at')),
            'Proof File': proof.get('file') or '',
            'Proof Link': proof.get('link') or '',
            'Review Notes': review.get('notes') or ''
        })

    csv_string = output.getvalue()
    output.close()

    return csv_string


def export_job_applications_to_csv(applications: List[Dict[str, Any]]) -> str:
    """
    Export internal job applications to CSV format.

    Args:
        applications: List of application dictionaries with job and employee info

    Returns:
        CSV string ready to be downloaded
    """

    output = io.StringIO()

    fieldnames = [
        'Application ID',
        'Job Title',
        'Job Department',
        'Employee Name',
        'Employee Email',
        'Status',
        'Match Percentage',
        'Resume Type',
        'Applied Date',
        'Skills'
    ]

    writer = csv.DictWriter(output, fieldnames=fieldnames)
    writer.writeheader()

    for app in applications:
        employee = app.get('employee') or {}
        writer.writerow({
            'Application ID': app.get('application_id', ''),
            'Job Title': app.get('job_title', ''),
            'Job Department': app.get('job_department', ''),
            'Employee Name': employee.get('full_name', ''),
            'Employee Email': employee.get('email', ''),
            'Status': app.get('status', ''),
            'Match Percentage': app.get('match_percentage', 0),
            'Resume Type': app.get('resume_type', ''),
            'Applied Date': _format_date(app.get('applied_date')),
            'Skills': ', '.join(app.get('skills', [])) if app.get('skills') else ''
        })

    csv_string = output.getvalue()
    output.close()

    return csv_string


def create_csv_response_headers(filename: str) -> Dict[str, str]:
    """
    Create headers for CSV file download response.

    Args:
        filename: Name of the CSV file (without .csv extension)

    Returns:
        Dictionary of headers for FastAPI Response
    """

    return {
        "Content-Disposition": f"attachment; filename={filename}.csv",
        "Content-Type": "text/csv"
    }
