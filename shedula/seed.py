"""Demo dataset loaded into an empty database at startup."""

import logging

from sqlalchemy.orm import Session

from shedula.models.appointment import Appointment
from shedula.models.doctor import Doctor, DoctorSlot
from shedula.models.doctor_appointment import DoctorAppointment
from shedula.models.doctor_user import DoctorUser
from shedula.models.patient import Patient
from shedula.models.user import User
from shedula.routes.doctor_portal_routes import WEEKDAYS

logger = logging.getLogger(__name__)

DOCTORS = [
    {
        'id': '1',
        'name': 'Dr. Shanaya',
        'specialty': 'Cardiologist',
        'experience': '15 years',
        'rating': 4.8,
        'image': 'https://images.unsplash.com/photo-1559839734-2b71ea197ec2?w=150&h=150&fit=crop&crop=face',
        'availability': ['Monday', 'Wednesday', 'Friday'],
        'slots': [
            ('2025-01-27', '09:00 AM', True),
            ('2025-01-27', '10:00 AM', True),
            ('2025-01-27', '11:00 AM', False),
            ('2025-01-29', '02:00 PM', True),
            ('2025-01-29', '03:00 PM', True),
            ('2025-01-31', '09:00 AM', True),
            ('2025-01-31', '10:00 AM', True),
        ],
    },
    {
        'id': '2',
        'name': 'Dr. Anil Kumar',
        'specialty': 'Dermatologist',
        'experience': '12 years',
        'rating': 4.6,
        'image': 'https://images.unsplash.com/photo-1612349317150-e413f6a5b16d?w=150&h=150&fit=crop&crop=face',
        'availability': ['Tuesday', 'Thursday', 'Saturday'],
        'slots': [
            ('2025-01-28', '10:00 AM', True),
            ('2025-01-28', '11:00 AM', True),
            ('2025-01-30', '02:00 PM', True),
            ('2025-01-30', '03:00 PM', False),
            ('2025-02-01', '09:00 AM', True),
            ('2025-02-01', '10:00 AM', True),
        ],
    },
    {
        'id': '3',
        'name': 'Dr. Shivani Patel',
        'specialty': 'Pediatrician',
        'experience': '18 years',
        'rating': 4.9,
        'image': 'https://images.unsplash.com/photo-1594824475544-3a1e0c4c7e6f?w=150&h=150&fit=crop&crop=face',
        'availability': ['Monday', 'Wednesday', 'Friday'],
        'slots': [
            ('2025-01-27', '09:00 AM', True),
            ('2025-01-27', '10:00 AM', True),
            ('2025-01-29', '02:00 PM', True),
            ('2025-01-29', '03:00 PM', True),
            ('2025-01-31', '09:00 AM', True),
            ('2025-01-31', '10:00 AM', True),
        ],
    },
    {
        'id': '4',
        'name': 'Dr. Rohan Upadhyay',
        'specialty': 'Neurologist',
        'experience': '20 years',
        'rating': 4.7,
        'image': 'https://images.unsplash.com/photo-1507003211169-0a1dd7228f2d?w=150&h=150&fit=crop&crop=face',
        'availability': ['Tuesday', 'Thursday'],
        'slots': [
            ('2025-01-28', '10:00 AM', True),
            ('2025-01-28', '11:00 AM', True),
            ('2025-01-30', '02:00 PM', True),
            ('2025-01-30', '03:00 PM', True),
        ],
    },
]

APPOINTMENTS = [
    {
        'id': '1',
        'doctor_name': 'Dr. Priya Sharma',
        'specialty': 'Cardiologist',
        'date': '2025-01-25',
        'time': '10:00 AM',
        'status': 'upcoming',
        'type': 'Consultation',
        'patient_id': 'user123',
    },
    {
        'id': '2',
        'doctor_name': 'Dr. Rajesh Kumar',
        'specialty': 'Dermatologist',
        'date': '2025-01-20',
        'time': '2:00 PM',
        'status': 'completed',
        'type': 'Check-up',
        'patient_id': 'user123',
    },
]

USERS = [
    {'id': 'user123', 'name': 'John Doe', 'email': 'john@example.com', 'phone': '+1-555-0123'},
]


def _week(schedule: dict[str, list[tuple[str, bool]]]) -> list[dict]:
    return [
        {
            'day': day,
            'isAvailable': day in schedule,
            'timeSlots': [
                {'time': slot_time, 'isAvailable': is_available}
                for slot_time, is_available in schedule.get(day, [])
            ],
        }
        for day in WEEKDAYS
    ]


DOCTOR_USERS = [
    {
        'id': 'doc1',
        'name': 'Dr. Sarah Johnson',
        'email': 'doctor@example.com',
        'phone': '+1-555-0001',
        'specialty': 'Cardiologist',
        'experience': '10 years',
        'rating': 4.8,
        'image': 'https://images.unsplash.com/photo-1559839734-2b71ea197ec2?w=150&h=150&fit=crop&crop=face',
        'bio': 'Experienced cardiologist with expertise in heart disease prevention and treatment.',
        'qualifications': ['MBBS', 'MD Cardiology', 'Fellowship in Interventional Cardiology'],
        'clinic_address': '123 Medical Center, Downtown',
        'consultation_fee': 500,
        'availability': _week({
            'Monday': [
                ('09:00 AM', True),
                ('10:00 AM', True),
                ('11:00 AM', False),
                ('02:00 PM', True),
                ('03:00 PM', True),
            ],
            'Wednesday': [('09:00 AM', True), ('10:00 AM', True), ('02:00 PM', True)],
            'Thursday': [('09:00 AM', True), ('10:00 AM', False), ('11:00 AM', True)],
            'Friday': [('09:00 AM', True), ('10:00 AM', True)],
        }),
        'is_verified': True,
        'created_at': '2024-01-01T00:00:00.000Z',
        'total_patients': 150,
        'total_appointments': 500,
    },
]

DOCTOR_APPOINTMENTS = [
    {
        'id': 'dapp1',
        'patient_id': 'user123',
        'patient_name': 'John Doe',
        'patient_phone': '+1-555-0123',
        'patient_email': 'john@example.com',
        'date': '2025-01-27',
        'time': '10:00 AM',
        'status': 'pending',
        'type': 'Consultation',
        'notes': '',
        'symptoms': 'Chest pain and shortness of breath',
        'prescription': '',
        'created_at': '2025-01-25T10:00:00.000Z',
        'updated_at': '2025-01-25T10:00:00.000Z',
    },
    {
        'id': 'dapp2',
        'patient_id': 'user123',
        'patient_name': 'John Doe',
        'patient_phone': '+1-555-0123',
        'patient_email': 'john@example.com',
        'date': '2025-01-25',
        'time': '09:00 AM',
        'status': 'completed',
        'type': 'Follow-up',
        'notes': 'Patient responded well to treatment',
        'symptoms': 'Follow-up for previous consultation',
        'prescription': 'Continue current medication for 2 weeks',
        'created_at': '2025-01-20T09:00:00.000Z',
        'updated_at': '2025-01-25T09:30:00.000Z',
    },
]

PATIENTS = [
    {
        'id': 'user123',
        'name': 'John Doe',
        'email': 'john@example.com',
        'phone': '+1-555-0123',
        'age': 35,
        'gender': 'Male',
        'address': '456 Oak Street, City',
        'medical_history': ['Hypertension', 'Diabetes Type 2'],
        'last_visit': '2025-01-25',
        'total_appointments': 5,
    },
]


def seed_demo_data(db: Session) -> bool:
    """Insert the demo dataset unless doctors already exist. Returns whether anything was written."""
    if db.query(Doctor).first() is not None:
        return False

    for entry in DOCTORS:
        fields = {key: value for key, value in entry.items() if key != 'slots'}
        doctor = Doctor(**fields)
        doctor.available_slots = [
            DoctorSlot(date=slot_date, time=slot_time, available=available)
            for slot_date, slot_time, available in entry['slots']
        ]
        db.add(doctor)

    db.add_all(Appointment(**entry) for entry in APPOINTMENTS)
    db.add_all(User(**entry) for entry in USERS)
    db.add_all(DoctorUser(**entry) for entry in DOCTOR_USERS)
    db.add_all(DoctorAppointment(**entry) for entry in DOCTOR_APPOINTMENTS)
    db.add_all(Patient(**entry) for entry in PATIENTS)
    db.commit()

    logger.info('Seeded demo data: %d doctors, %d appointments', len(DOCTORS), len(APPOINTMENTS))
    return True
