from datetime import date

from conftest import make_user


def test_school_crud(admin_client):
    response = admin_client.post('/api/schools', json={'name': 'Riverside Academy', 'contact_email': 'hi@riverside.edu'})
    assert response.status_code == 201
    school = response.get_json()
    assert school['id'] == 1
    assert school['created_at'] is not None

    assert admin_client.get('/api/schools/1').get_json()['name'] == 'Riverside Academy'
    assert len(admin_client.get('/api/schools').get_json()) == 1

    response = admin_client.patch('/api/schools/1', json={'contact_phone': '555-0123'})
    assert response.status_code == 200
    updated = response.get_json()
    assert updated['contact_phone'] == '555-0123'
    assert updated['name'] == 'Riverside Academy'

    response = admin_client.delete('/api/schools/1')
    assert response.status_code == 204
    assert admin_client.get('/api/schools/1').status_code == 404


def test_missing_records_answer_json_404(admin_client):
    response = admin_client.get('/api/schools/42')
    assert response.status_code == 404
    assert response.get_json() == {'success': False, 'message': 'School not found'}
    assert admin_client.patch('/api/classes/42', json={'grade': '9'}).status_code == 404
    assert admin_client.delete('/api/teachers/42').status_code == 404


def test_partial_update_validates_only_sent_fields(admin_client, school):
    response = admin_client.put(f'/api/schools/{school.id}', json={'contact_email': 'nope'})
    assert response.status_code == 400
    assert list(response.get_json()['errors']) == ['contact_email']

    response = admin_client.patch(f'/api/schools/{school.id}', json={'name': None})
    assert response.status_code == 400

    response = admin_client.patch(f'/api/schools/{school.id}', json={'unrelated': 1})
    assert response.status_code == 400
    assert response.get_json()['message'] == 'No updatable fields in request'


def test_null_clears_optional_field(admin_client, school):
    response = admin_client.patch(f'/api/schools/{school.id}', json={'contact_email': None})
    assert response.status_code == 200
    assert response.get_json()['contact_email'] is None


def test_school_summary_counts(admin_client, storage, school, class_8a):
    storage.create_student({'user_id': 50, 'school_id': school.id, 'class_id': class_8a.id})
    response = admin_client.get(f'/api/schools/{school.id}/summary')
    assert response.status_code == 200
    body = response.get_json()
    assert body['school']['name'] == school.name
    assert body['counts']['students'] == 1
    assert body['counts']['classes'] == 1


def test_per_school_listings(admin_client, storage, school, class_8a):
    teacher_user = make_user(storage, 'ravi@school.edu', 'teacher')
    storage.create_teacher({'user_id': teacher_user.id, 'school_id': school.id})
    storage.create_subject({'school_id': school.id, 'name': 'Geography'})
    storage.create_bill({'school_id': school.id, 'title': 'Electricity', 'amount': 320.5})
    storage.create_subject({'school_id': school.id + 1, 'name': 'Elsewhere'})

    assert len(admin_client.get(f'/api/schools/{school.id}/teachers').get_json()) == 1
    assert [s['name'] for s in admin_client.get(f'/api/schools/{school.id}/subjects').get_json()] == ['Geography']
    assert [c['grade'] for c in admin_client.get(f'/api/schools/{school.id}/classes').get_json()] == ['8']
    assert admin_client.get(f'/api/schools/{school.id}/bills').get_json()[0]['amount'] == 320.5
    assert admin_client.get(f'/api/schools/{school.id}/exams').get_json() == []


def test_bills_are_admin_only(teacher_client, school):
    assert teacher_client.get(f'/api/schools/{school.id}/bills').status_code == 403
    assert teacher_client.post('/api/bills', json={'school_id': school.id, 'title': 'Water', 'amount': 10}).status_code == 403


def test_user_admin_routes(admin_client, storage):
    user = make_user(storage, 'lee@school.edu', 'teacher')
    response = admin_client.patch(f'/api/users/{user.id}', json={'full_name': 'Lee Chen', 'status': 'inactive'})
    assert response.status_code == 200
    assert storage.get_user(user.id).full_name == 'Lee Chen'
    assert storage.get_user(user.id).is_active is False

    # Email addresses stay unique
    response = admin_client.patch(f'/api/users/{user.id}', json={'email': admin_client.user.email})
    assert response.status_code == 400

    assert admin_client.delete(f'/api/users/{user.id}').status_code == 204
    assert storage.get_user(user.id) is None


def test_school_admin_links(admin_client, storage, school):
    response = admin_client.post('/api/school-admins', json={'user_id': admin_client.user.id, 'school_id': school.id})
    assert response.status_code == 201
    admins = admin_client.get(f'/api/schools/{school.id}/admins').get_json()
    assert admins == [{'id': 1, 'user_id': admin_client.user.id, 'school_id': school.id}]


def test_class_and_subject_management(admin_client, teacher_client, storage, school):
    response = admin_client.post('/api/classes', json={'school_id': school.id, 'grade': '9', 'section': 'B'})
    assert response.status_code == 201
    class_id = response.get_json()['id']

    response = admin_client.post('/api/subjects', json={'school_id': school.id, 'name': 'Physics'})
    subject_id = response.get_json()['id']

    response = admin_client.post('/api/class-subjects', json={'class_id': class_id, 'subject_id': subject_id})
    assert response.status_code == 201
    assert response.get_json()['teacher_id'] is None

    subjects = teacher_client.get(f'/api/classes/{class_id}/subjects').get_json()
    assert [s['subject_id'] for s in subjects] == [subject_id]

    assert teacher_client.post('/api/classes', json={'school_id': school.id, 'grade': '7', 'section': 'A'}).status_code == 403


def test_class_create_requires_grade_and_section(admin_client, school):
    response = admin_client.post('/api/classes', json={'school_id': school.id})
    assert response.status_code == 400
    assert set(response.get_json()['errors']) == {'grade', 'section'}


def test_teacher_records_and_listings(admin_client, storage, school, class_8a):
    user = make_user(storage, 'nina@school.edu', 'teacher')
    response = admin_client.post('/api/teachers', json={
        'user_id': user.id, 'school_id': school.id, 'subject_specialization': 'Mathematics',
        'joining_date': '2023-08-15',
    })
    assert response.status_code == 201
    teacher = response.get_json()
    assert teacher['joining_date'] == '2023-08-15'
    assert teacher['status'] == 'active'

    subject = storage.create_subject({'school_id': school.id, 'name': 'Mathematics'})
    storage.create_class_subject({'class_id': class_8a.id, 'subject_id': subject.id, 'teacher_id': teacher['id']})
    listed = admin_client.get(f"/api/teachers/{teacher['id']}/class-subjects").get_json()
    assert [cs['class_id'] for cs in listed] == [class_8a.id]


def test_teacher_attendance_by_date(admin_client, storage, school):
    storage.create_teacher_attendance({'teacher_id': 1, 'school_id': school.id, 'date': date(2024, 9, 2), 'status': 'present'})
    storage.create_teacher_attendance({'teacher_id': 1, 'school_id': school.id, 'date': date(2024, 9, 3), 'status': 'leave'})

    response = admin_client.get(f'/api/schools/{school.id}/teacher-attendance?date=2024-09-03')
    assert [a['status'] for a in response.get_json()] == ['leave']
    assert admin_client.get(f'/api/schools/{school.id}/teacher-attendance?date=yesterday').status_code == 400
    assert len(admin_client.get('/api/teachers/1/attendance').get_json()) == 2


def test_teacher_attendance_routes(teacher_client, school):
    response = teacher_client.post('/api/teacher-attendance', json={
        'teacher_id': 1, 'school_id': school.id, 'date': '2024-09-02', 'status': 'present',
    })
    assert response.status_code == 201
    record_id = response.get_json()['id']

    response = teacher_client.patch(f'/api/teacher-attendance/{record_id}', json={'status': 'holiday'})
    assert response.status_code == 400
    response = teacher_client.patch(f'/api/teacher-attendance/{record_id}', json={'status': 'late'})
    assert response.get_json()['status'] == 'late'
    assert teacher_client.delete(f'/api/teacher-attendance/{record_id}').status_code == 204


def test_home_route(client):
    assert client.get('/').get_json()['status'] == 'ok'


def test_unknown_api_route_answers_json(admin_client):
    response = admin_client.get('/api/no-such-thing')
    assert response.status_code == 404
    assert response.get_json()['success'] is False
