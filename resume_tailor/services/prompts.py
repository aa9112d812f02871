JOB_DESCRIPTION_PROMPT = """
                You are a specialized job description parser. Extract information from the
                job description below and return ONLY valid JSON with the following structure:

                ${JobDescriptionFormat}

                EXTRACTION RULES:
                1. Extract actual skills/tools/technologies mentioned (e.g., "Python", "AWS", "React", "5+ years experience").
                2. For responsibilities, extract concrete tasks and duties, not vague statements.
                3. Separate required vs preferred skills carefully: "must have", "required", "essential"
                versus "nice to have", "preferred", "bonus".
                4. Include years of experience as part of skill descriptions when specified.
                5. If information is not available, use null for strings or empty arrays [].
                6. Be specific and detailed in extractions rather than generic.

                Job Description: ${jobDescription}

                Return ONLY the JSON object, no additional text or explanation.
                """

job_description_structure = """
                {
                "title": "The job title/position name",
                "company": "Company name if mentioned, otherwise null",
                "location": "Job location if specified, otherwise null",
                "employment_type": "full-time, part-time, contract, internship, etc. or null",
                "experience_level": "entry, mid, senior, lead, executive, etc. or null",
                "salary_range": "salary information if mentioned, otherwise null",
                "required_skills": ["Python programming with 3+ years experience"],
                "preferred_skills": ["Experience with Kubernetes"],
                "responsibilities": ["Design and implement RESTful APIs using Node.js"],
                "qualifications": ["Bachelor's degree in Computer Science or related field"],
                "benefits": ["Health insurance and 401k matching"],
                "department": "department/team if mentioned, otherwise null"
            }
            """

RESUME_PROFILE_PROMPT = """
                Extract structured data from a resume and return valid JSON in this format:

                ${ProfileFormat}

                Rules: Clean formatting. Categorize skills as Technical (tools/code), Hard (measurable),
                or Soft (personal). Preserve date formats. Use nulls/empty strings/arrays where needed.
                Infer skill levels or default to 'Intermediate'. Include social and project links.
                Return JSON only.

                Resume Data:
                ${resumeData}
                """

profile_structure = """
                {
                "name": "Full name",
                "email": "Email or null",
                "phone": "Phone or null",
                "location": "Address or null",
                "summary": "Professional summary or null",
                "skills": [{ "skill": "Name", "category": "Soft Skill|Hard Skill|Technical Skill|null", "level": "Beginner|Intermediate|Advanced|Expert" }],
                "certifications": [
                    { "name": "Name", "issuer": "Organization", "issue_date": "Date or ''", "expiry_date": "Date or ''", "credential_id": "ID or ''", "credential_url": "URL or ''", "year": "Year or ''" }
                ],
                "experience": [
                    {
                        "title": "Job title",
                        "company": "Company",
                        "duration": "E.g., Jan 2020 - Present",
                        "location": "Location or ''",
                        "responsibilities": ["List of tasks and achievements"]
                    }
                ],
                "education": [
                    { "field": "Field of study", "degree": "Degree", "description": "Optional or ''", "institution": "School", "location": "Location or ''", "duration": "e.g., 2016-2020", "gpa": 3.8 }
                ],
                "projects": [
                    { "name": "Name or null", "description": "Description or null", "technologies": ["List or []"], "link": "URL or null" }
                ],
                "links": { "linkedin": "URL or null", "portfolio": "URL or null", "github": "URL or null" },
                "languages": [{ "language": "Name", "level": "Proficiency" }]
            }
            """

TAILOR_RESUME_PROMPT = """
                You are a professional resume writer. The best there is.
                Given this user profile: ${profile}
                And this job description: ${jobDescription}
                Generate a tailored resume JSON with the following structure, with reference to the
                profile and job description:
                ${ResumeFormat}
                Use a professional tone. Prioritize relevance, match job keywords, use strong action verbs,
                and quantify achievements where possible. Do not invent employers, degrees or certifications
                that are not in the profile.
                Respond ONLY with a valid JSON object. No Markdown, no backticks.
                """

resume_structure = """
                {
                "name": "Full Name",
                "email": "Email Address",
                "phone": "Phone Number (if available)",
                "location": "City, Country (if available)",
                "summary": "Tailored professional summary",
                "skills": ["Relevant skills as presented in the profile"],
                "languages": ["Languages spoken (if applicable) from profile"],
                "certifications": [
                    { "name": "Certification name", "issuer": "Issuing organization", "year": "Year obtained" }
                ],
                "experience": [
                    {
                        "title": "Job title",
                        "company": "Company name",
                        "duration": "Employment duration",
                        "location": "City, Country (if available)",
                        "responsibilities": ["Key responsibilities and achievements"]
                    }
                ],
                "education": [
                    { "degree": "Degree title", "institution": "University or school", "location": "City, Country", "year": "Graduation year" }
                ],
                "projects": [
                    {
                        "title": "Project title",
                        "description": "Brief description of the project",
                        "technologies": ["Tech used"],
                        "outcome": "Result or impact (if any)"
                    }
                ],
                "links": {
                    "linkedin": "LinkedIn profile URL (if available)",
                    "portfolio": "Portfolio or personal site (if any)",
                    "github": "GitHub profile (if applicable)"
                }
            }
            """

ATS_REPORT_PROMPT = """
                Analyze the provided JOB_DESCRIPTION and CANDIDATE_RESUME using the very strict TAILOR ATS
                framework (Target Keywords, Achieved Impact, Industry Relevance, Length of Experience,
                Optimized Formatting, Role Alignment).

                Generate a JSON object following the exact structure provided in JSON_OUTPUT_SCHEMA_EXAMPLE.
                Populate all fields with relevant data from the analysis. Scores are percentages (0-100)
                and explanations are concise.

                JOB_DESCRIPTION: ${jobDescription}
                CANDIDATE_RESUME: ${resume}
                JSON_OUTPUT_SCHEMA_EXAMPLE:
                ${AtsReportFormat}
                No extra text, no Markdown, no backticks. Just valid JSON.
                """

ats_report_structure = """
                {
                "candidate_name": "Jane Doe",
                "job_title": "Senior Software Engineer (Backend)",
                "overall_fit_score_percentage": 90,
                "overall_recommendation": "Strong Fit",
                "tailor_analysis": {
                    "T_target_keywords": {
                        "score_percentage": 92,
                        "matched_keywords": ["Python", "Django", "REST API", "PostgreSQL"],
                        "missing_keywords": ["Kubernetes"],
                        "explanation": "Excellent match on core technical skills and tools."
                    },
                    "A_achieved_impact": {
                        "score_percentage": 88,
                        "impact_statements_found": ["Increased system performance by 30% by optimizing database queries."],
                        "explanation": "Strong evidence of measurable impact."
                    },
                    "I_industry_relevance": {
                        "score_percentage": 95,
                        "relevant_industries_found": ["Fintech"],
                        "explanation": "Direct experience in a closely related domain."
                    },
                    "L_length_of_experience": {
                        "score_percentage": 90,
                        "total_years_experience": 7.5,
                        "average_tenure_years": 3.75,
                        "required_experience_years": 5,
                        "explanation": "Exceeds the minimum experience requirement."
                    },
                    "O_optimized_formatting": {
                        "score_percentage": 80,
                        "readability_assessment": "Excellent",
                        "key_sections_present": ["Summary", "Experience", "Skills", "Education"],
                        "explanation": "Clear headings and easy-to-read sections."
                    },
                    "R_role_alignment": {
                        "score_percentage": 87,
                        "aligned_responsibilities": ["Developing and maintaining RESTful APIs."],
                        "misaligned_responsibilities_or_gaps": [],
                        "explanation": "Past responsibilities align closely with the core duties."
                    }
                },
                "red_flags": [],
                "notes": "Candidate demonstrates strong technical proficiency."
            }
            """

COVER_LETTER_PROMPT = """
                You are a world-class communications expert and career strategist with a proven record
                of writing high-impact, ATS-optimized cover letters.

                Craft a compelling, personalized cover letter tailored to the job description below:
                ${jobDescription}

                Based on this candidate's resume/profile data:
                ${resume}

                Tone: ${tone}

                Guidelines:
                - Start with a strong, personalized opening.
                - Highlight the most relevant achievements with quantifiable results.
                - End with a clear, confident call to action.
                - Keep it concise (3-4 paragraphs).
                - Make it sound natural and avoid overly generic language.

                Return only the plain text of the final cover letter, no extra formatting or markdown.
                """
