"""
Report strings for each supported language
"""

TRANSLATIONS = {
    'en': {
        'report': {
            'title': 'JAL SANRAKSHAN: Your Personalized Water Security Report',
            'subtitle': 'Empowering You to Harvest Every Drop',
            'generated': 'Report generated on',
            'sections': {
                'executiveSummary': 'Executive Summary',
                'siteAssessment': 'Site Assessment',
                'harvestingPotential': 'Harvesting Potential',
                'hydroProfile': 'Hydrogeological Profile',
                'structure': 'Recommended Structure & Design',
                'costTiers': 'Cost Tiers & Payback',
                'limitations': 'Report Limitations'
            },
            'labels': {
                'name': 'Name',
                'phone': 'Phone',
                'location': 'Location',
                'roofArea': 'Roof Area',
                'roofType': 'Roof Type',
                'runoff': 'Runoff Coefficient',
                'existingWell': 'Existing Well',
                'purpose': 'Purpose',
                'feasibility': 'Feasibility',
                'harvestable': 'Annual Harvestable Water',
                'structure': 'Recommended Structure',
                'payback': 'Estimated Payback',
                'rainfall': 'Annual Rainfall',
                'soil': 'Soil Type',
                'aquifer': 'Principal Aquifer',
                'groundwater': 'Groundwater Depth',
                'scenario': 'Scenario',
                'low': 'Low (Dry Year)',
                'actual': 'Actual',
                'high': 'High (Wet Year)',
                'years': 'years',
                'structureType': 'Type',
                'dimension': 'Diameter/Capacity',
                'depth': 'Depth',
                'construction': 'Construction',
                'cost': 'Cost (Rs.)'
            },
            'disclaimers': {
                'dataSource': 'Data derived from external APIs (IMD/OpenMeteo).',
                'validation': 'Technical validation requires an on-site inspection.',
                'assumptions': 'Financial projections based on estimated averages.',
                'fallbackRainfall': 'Live rainfall data was unavailable; this estimate uses typical regional rainfall.'
            }
        }
    },
    'hi': {
        'report': {
            'title': 'जल संरक्षण: आपकी व्यक्तिगत जल सुरक्षा रिपोर्ट',
            'subtitle': 'आपको हर बूँद सहेजने के लिए सशक्त बनाना',
            'generated': 'रिपोर्ट तैयार करने की तिथि',
            'sections': {
                'executiveSummary': 'कार्यकारी सारांश',
                'siteAssessment': 'साइट मूल्यांकन',
                'harvestingPotential': 'जल संचयन क्षमता',
                'hydroProfile': 'हाइड्रोजियोलॉजिकल प्रोफ़ाइल',
                'structure': 'अनुशंसित संरचना और डिज़ाइन',
                'costTiers': 'लागत स्तर और भुगतान अवधि',
                'limitations': 'रिपोर्ट सीमाएँ'
            },
            'labels': {
                'name': 'नाम',
                'phone': 'फ़ोन',
                'location': 'स्थान',
                'roofArea': 'छत का क्षेत्रफल',
                'roofType': 'छत का प्रकार',
                'runoff': 'अपवाह गुणांक',
                'existingWell': 'मौजूदा कुआँ',
                'purpose': 'उद्देश्य',
                'feasibility': 'व्यवहार्यता',
                'harvestable': 'वार्षिक संचयन योग्य जल',
                'structure': 'अनुशंसित संरचना',
                'payback': 'अनुमानित भुगतान अवधि',
                'rainfall': 'वार्षिक वर्षा',
                'soil': 'मिट्टी का प्रकार',
                'aquifer': 'प्रमुख जलभृत',
                'groundwater': 'भूजल गहराई',
                'scenario': 'परिदृश्य',
                'low': 'निम्न (सूखा वर्ष)',
                'actual': 'वास्तविक',
                'high': 'उच्च (वर्षा वर्ष)',
                'years': 'वर्ष',
                'structureType': 'प्रकार',
                'dimension': 'व्यास/क्षमता',
                'depth': 'गहराई',
                'construction': 'निर्माण',
                'cost': 'लागत (रु.)'
            },
            'disclaimers': {
                'dataSource': 'डेटा बाहरी एपीआई (आईएमडी/ओपनमेटियो) से प्राप्त होता है।',
                'validation': 'तकनीकी सत्यापन के लिए साइट पर निरीक्षण आवश्यक है।',
                'assumptions': 'वित्तीय अनुमान अनुमानित औसत पर आधारित हैं।',
                'fallbackRainfall': 'लाइव वर्षा डेटा उपलब्ध नहीं था; यह अनुमान सामान्य क्षेत्रीय वर्षा पर आधारित है।'
            }
        }
    }
}


def get_translations(lang):
    """Catalogue for a language, English when unsupported"""
    return TRANSLATIONS.get(lang) or TRANSLATIONS['en']
