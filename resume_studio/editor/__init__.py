from resume_studio.editor.export import AutoExport, ExportTrigger, Navigation
from resume_studio.editor.form import ResumeForm
from resume_studio.editor.sections import SectionEditor
from resume_studio.editor.session import EditorSession, EditorSessions
from resume_studio.editor.skills import format_skills, parse_skills

__all__ = [
    "AutoExport",
    "EditorSession",
    "EditorSessions",
    "ExportTrigger",
    "Navigation",
    "ResumeForm",
    "SectionEditor",
    "format_skills",
    "parse_skills",
]
