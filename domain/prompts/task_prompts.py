"""Task description builders for the two kinds of remote automation jobs."""

from __future__ import annotations

from domain.models import JobPostingRef, UserProfile

_NO_RESUME_TEXT = "No plaintext resume available, but PDF data is available for upload."


def build_apply_task_prompt(
    *,
    job: JobPostingRef,
    profile: UserProfile,
    resume_text: str | None = None,
) -> str:
    """Build the instructions the worker follows to fill in one application."""

    resume_block = resume_text.strip() if resume_text and resume_text.strip() else _NO_RESUME_TEXT
    return (
        f"Go to the job application URL: {job.job_url}\n"
        f"\n"
        f"Position: {job.job_title} at {job.company_name}\n"
        f"\n"
        f"Analyze the page to determine the type of job application form:\n"
        f"- Look for application forms, \"Apply Now\" buttons, or login requirements\n"
        f"- Determine if it's a direct application or redirects to another platform\n"
        f"\n"
        f"Below is the user's resume information to use for filling out forms:\n"
        f"{resume_block}\n"
        f"\n"
        f"Proceed based on the page type:\n"
        f"1. For direct application forms:\n"
        f"   - Fill out the form with the resume data provided above\n"
        f"   - For name fields, use \"{profile.full_name}\"\n"
        f"   - For email, use \"{profile.email}\"\n"
        f"   - For phone, use \"{profile.phone or 'User phone'}\"\n"
        f"   - For location/address, use \"{profile.location or 'User location'}\"\n"
        f"   - Upload resume if possible\n"
        f"   - Complete all required fields and submit the application if possible\n"
        f"2. For login-required applications:\n"
        f"   - Note that the site requires login\n"
        f"   - Do not attempt to create accounts\n"
        f"   - Report this obstacle clearly\n"
        f"3. For multi-step applications:\n"
        f"   - Complete as many steps as possible and document progress through each step\n"
        f"4. For redirects to job boards (Indeed, LinkedIn, etc.):\n"
        f"   - Follow the redirect, attempt to apply there and name the platform used\n"
        f"\n"
        f"Document the entire process including:\n"
        f"- Form fields encountered and what data was entered\n"
        f"- Any obstacles or barriers to completing the application\n"
        f"- Confirmation messages or errors received\n"
        f"- Final status of the application (completed, partial, blocked)\n"
        f"\n"
        f"Return to google.com when finished.\n"
        f"Compile and return the detailed application results including all steps taken "
        f"and the final outcome."
    )


def build_contact_search_task_prompt(*, company: str) -> str:
    return (
        f"Go to Google.com (always start with this step)\n"
        f"Search for the company {company} on LinkedIn.\n"
        f"\n"
        f"Check if the company has a LinkedIn page.\n"
        f"    If no LinkedIn page is found, return to Google.com and exit the process.\n"
        f"    If a LinkedIn page is found, click on the company page.\n"
        f"\n"
        f"Navigate to the People section of the company's LinkedIn page.\n"
        f"    Scroll through the people cards to find people in HR-related roles.\n"
        f"    Skip accounts labeled \"LinkedIn Member\", these are private.\n"
        f"\n"
        f"Find at least one employee with a job title related to Human Resources, "
        f"Recruitment, Talent Acquisition or Hiring Manager.\n"
        f"    If no suitable employee is found, return to Google.com and exit the process.\n"
        f"\n"
        f"Open the selected employee's profile, click the More button and open the "
        f"Contact Info overlay. Collect full name, profile image URL, job title, "
        f"LinkedIn profile URL, email and company website where available.\n"
        f"\n"
        f"Return to google.com.\n"
        f"Compile and return all collected information about the HR employee(s) and "
        f"any available company HR contact details."
    )
