"""
PDF report rendering for feasibility assessments (fpdf2)
"""
import logging

from fpdf import FPDF, XPos, YPos

from config.translations import get_translations
from services.structure_details import format_indian_number

logger = logging.getLogger(__name__)

UNICODE_FAMILY = 'ReportUnicode'
CORE_FAMILY = 'Helvetica'
ACCENT = (0, 77, 76)
BODY = (51, 51, 51)


def _is_latin1(value):
    try:
        str(value).encode('latin-1')
        return True
    except UnicodeEncodeError:
        return False


def _catalogue_is_latin1(node):
    if isinstance(node, dict):
        return all(_catalogue_is_latin1(v) for v in node.values())
    return _is_latin1(node)


class ReportPDF(FPDF):
    """A4 report with section headings and key/value tables"""

    def __init__(self, family, header_text, sanitize=False):
        super().__init__(format='A4')
        self.report_family = family
        self.header_text = header_text
        self.sanitize = sanitize
        self.set_auto_page_break(auto=True, margin=15)

    def clean(self, value):
        value = str(value)
        if self.sanitize:
            return value.encode('latin-1', 'replace').decode('latin-1')
        return value

    def header(self):
        self.set_font(self.report_family, 'B', 10)
        self.set_text_color(*ACCENT)
        self.cell(0, 8, self.clean(self.header_text), new_x=XPos.LMARGIN, new_y=YPos.NEXT, align='C')
        self.ln(2)

    def footer(self):
        self.set_y(-15)
        self.set_font(self.report_family, '', 8)
        self.set_text_color(*BODY)
        self.cell(0, 10, f'Page {self.page_no()}', align='C')

    def section_title(self, title):
        self.set_font(self.report_family, 'B', 14)
        self.set_text_color(*ACCENT)
        self.cell(0, 10, self.clean(title), new_x=XPos.LMARGIN, new_y=YPos.NEXT, align='L')
        self.line(self.get_x(), self.get_y(), self.get_x() + 190, self.get_y())
        self.ln(4)

    def write_key_value_table(self, rows):
        self.set_text_color(*BODY)
        key_col_width = 65
        val_col_width = self.w - self.l_margin - self.r_margin - key_col_width
        line_height = 7
        for key, value in rows:
            self.set_font(self.report_family, 'B', 11)
            self.cell(key_col_width, line_height, self.clean(key), border=0)
            self.set_font(self.report_family, '', 11)
            self.multi_cell(val_col_width, line_height, self.clean(value), border=0,
                            new_x=XPos.LMARGIN, new_y=YPos.NEXT)
        self.ln(4)

    def write_table(self, headers, rows, widths):
        self.set_text_color(*BODY)
        self.set_font(self.report_family, 'B', 10)
        for header, width in zip(headers, widths):
            self.cell(width, 8, self.clean(header), border=1, align='C')
        self.ln()
        self.set_font(self.report_family, '', 10)
        for row in rows:
            for value, width in zip(row, widths):
                self.cell(width, 8, self.clean(value), border=1, align='C')
            self.ln()
        self.ln(4)

    def write_list(self, items):
        self.set_font(self.report_family, '', 10)
        self.set_text_color(*BODY)
        for item in items:
            self.multi_cell(0, 6, self.clean(f'- {item}'), new_x=XPos.LMARGIN, new_y=YPos.NEXT)
        self.ln(2)


class ReportRenderer:
    """
    Render a report context (see services.structure_details.build_report_context)
    into PDF bytes.

    Core PDF fonts only cover Latin-1; without a Unicode font file, languages
    outside that range are rendered in English.
    """

    def __init__(self, font_path=None, bold_font_path=None):
        self.font_path = font_path
        self.bold_font_path = bold_font_path or font_path

    def _new_pdf(self, translations):
        header_text = translations['report']['title']
        if self.font_path:
            pdf = ReportPDF(UNICODE_FAMILY, header_text)
            pdf.add_font(UNICODE_FAMILY, '', self.font_path)
            pdf.add_font(UNICODE_FAMILY, 'B', self.bold_font_path)
            return pdf
        return ReportPDF(CORE_FAMILY, header_text, sanitize=True)

    def _resolve_translations(self, context):
        translations = context['translations']
        if not self.font_path and not _catalogue_is_latin1(translations):
            logger.warning(f"No Unicode font configured; rendering '{context['lang']}' report in English")
            translations = get_translations('en')
        return translations

    def render(self, context):
        translations = self._resolve_translations(context)
        report = translations['report']
        sections = report['sections']
        labels = report['labels']
        disclaimers = report['disclaimers']

        site = context['site']
        result = context['result']
        user = context['user']

        pdf = self._new_pdf(translations)
        pdf.add_page()

        pdf.set_font(pdf.report_family, 'B', 18)
        pdf.set_text_color(*ACCENT)
        pdf.multi_cell(0, 10, pdf.clean(report['title']), new_x=XPos.LMARGIN, new_y=YPos.NEXT, align='C')
        pdf.set_font(pdf.report_family, '', 11)
        pdf.set_text_color(*BODY)
        pdf.cell(0, 8, pdf.clean(report['subtitle']), new_x=XPos.LMARGIN, new_y=YPos.NEXT, align='C')
        pdf.cell(0, 8, pdf.clean(f"{report['generated']}: {context['date']}"),
                 new_x=XPos.LMARGIN, new_y=YPos.NEXT, align='C')
        pdf.ln(6)

        pdf.section_title(sections['executiveSummary'])
        pdf.write_key_value_table([
            (labels['feasibility'], result.feasibility_tier),
            (labels['harvestable'], f"{format_indian_number(result.harvestable_water_liters)} Liters"),
            (labels['structure'], result.recommended_structure),
            (labels['payback'], f"{result.estimated_payback_years} {labels['years']}"),
        ])

        pdf.section_title(sections['siteAssessment'])
        pdf.write_key_value_table([
            (labels['name'], user.get('full_name') or '-'),
            (labels['phone'], user.get('phone_number') or '-'),
            (labels['location'], site.location or '-'),
            (labels['roofArea'], f"{site.roof_area_sqm} m²"),
            (labels['roofType'], site.roof_type),
            (labels['runoff'], f"{context['runoff_coefficient']:.2f}"),
            (labels['existingWell'], site.existing_well),
            (labels['purpose'], site.purpose),
        ])

        pdf.section_title(sections['harvestingPotential'])
        scenario_rows = []
        for name in ('low', 'actual', 'high'):
            point = context['scenarios'][name]
            scenario_rows.append((labels[name], f"{point.rainfall_mm:.0f} mm",
                                  f"{format_indian_number(point.harvestable_liters)} L"))
        pdf.write_table([labels['scenario'], labels['rainfall'], labels['harvestable']], scenario_rows, [60, 50, 80])

        hydro = context['hydro_profile']
        pdf.section_title(sections['hydroProfile'])
        pdf.write_key_value_table([
            (labels['rainfall'], f"{hydro['rainfall_mm']} mm/year"),
            (labels['soil'], context['soil_description']),
            (labels['aquifer'], hydro['aquifer']),
            (labels['groundwater'], f"{hydro['groundwater_depth_m']} meters"),
        ])

        pdf.section_title(sections['structure'])
        pdf.write_key_value_table([(labels[key], value) for key, value in context['structure_rows']])

        pdf.section_title(sections['costTiers'])
        for tier in context['cost_tiers']:
            pdf.set_font(pdf.report_family, 'B', 11)
            pdf.set_text_color(*ACCENT)
            pdf.cell(0, 8, pdf.clean(tier['label']), new_x=XPos.LMARGIN, new_y=YPos.NEXT)
            pdf.write_key_value_table([
                (labels['cost'], format_indian_number(tier['cost'])),
                (labels['structure'], tier['structure']),
                (labels['payback'], f"{tier['payback']} {labels['years']}"),
            ])

        pdf.section_title(sections['limitations'])
        notes = [disclaimers['dataSource'], disclaimers['validation'], disclaimers['assumptions']]
        if context['rainfall_is_fallback']:
            notes.insert(0, disclaimers['fallbackRainfall'])
        pdf.write_list(notes)

        return bytes(pdf.output())
