import base64

from flask import jsonify, request

from potion_remote import Application, Collection, Model, HasMany, get_application
from potion_remote.exceptions import ConfigurationError, RemoteAuthenticationError
from tests import BaseTestCase, FlaskAdapter, REMOTE_URL


class ApplicationTestCase(BaseTestCase):

    def test_url(self):
        self.assertEqual('http://example.com', Application('example', url='example.com').url)
        self.assertEqual('https://example.com/api', Application('example', url='https://example.com/api').url)
        self.assertIsNone(Application('example').url)

        with self.assertRaises(ConfigurationError):
            Application('example', url='exa mple.com')

    def test_registry(self):
        application = Application('garage', url='garage.test')

        self.assertIs(application, get_application('garage'))
        self.assertIs(self.application, get_application('test'))

        with self.assertRaises(ConfigurationError):
            get_application('unknown')

    def test_config_defaults(self):
        application = Application('garage', config={'REMOTE_TIMEOUT': 3})

        self.assertEqual(3, application.config['REMOTE_TIMEOUT'])
        self.assertEqual({'Accept': 'application/json'}, application.config['REMOTE_HEADERS'])

    def test_credentials(self):
        self.assertIsNone(Application('garage').credentials())
        self.assertEqual(('user', 'secret'), Application('garage', basic_auth=['user', 'secret']).credentials())

        tokens = iter(['first', 'second'])
        application = Application('garage', basic_auth=lambda: ('user', next(tokens)))
        self.assertEqual(('user', 'first'), application.credentials())
        self.assertEqual(('user', 'second'), application.credentials())

    def test_url_for(self):
        connection = Application('garage', url='garage.test/api/').connection

        self.assertEqual('http://garage.test/api/cars/1', connection.url_for('/cars/1'))
        self.assertEqual('http://other.test/cars', connection.url_for('http://other.test/cars'))

        with self.assertRaises(ConfigurationError):
            Application('garage').connection.url_for('/cars')


class ConnectionTestCase(BaseTestCase):

    def create_application(self):
        return Application('test',
                           url=REMOTE_URL,
                           basic_auth=lambda: ('finn', 'mathematical'),
                           config={'REMOTE_HEADERS': {'Accept': 'application/json', 'X-Client': 'garage'}})

    def setUp(self):
        super(ConnectionTestCase, self).setUp()

        @self.app.route('/echo', methods=['GET', 'POST', 'PUT', 'DELETE'])
        def echo():
            return jsonify({
                "method": request.method,
                "args": request.args.to_dict(),
                "json": request.get_json(silent=True),
                "authorization": request.headers.get('Authorization'),
                "client": request.headers.get('X-Client')
            })

        @self.app.route('/empty', methods=['DELETE'])
        def empty():
            return '', 204

        @self.app.route('/text')
        def text():
            return 'not json', 200, {'Content-Type': 'text/plain'}

    def test_request(self):
        status, body = self.application.connection.request('get', '/echo', {'q': 'car'},
                                                           credentials=self.application.credentials())
        token = base64.b64encode(b'finn:mathematical').decode('ascii')

        self.assertEqual(200, status)
        self.assertEqual({
            "method": "GET",
            "args": {"q": "car"},
            "json": None,
            "authorization": "Basic {}".format(token),
            "client": "garage"
        }, body)

    def test_json_body(self):
        response = self.application.client.post('/echo', {"name": "Finn"})

        self.assertEqual(200, response.status)
        self.assertEqual("POST", response.body['method'])
        self.assertEqual({"name": "Finn"}, response.body['json'])
        self.assertEqual({}, response.body['args'])

    def test_empty_body(self):
        response = self.application.client.delete('/empty')

        self.assertEqual(204, response.status)
        self.assertIsNone(response.body)

    def test_not_found(self):
        status, body = self.application.connection.request('GET', '/missing')

        self.assertEqual(404, status)
        self.assertIsInstance(body, str)
        self.assertIsNone(self.application.client.get('/missing'))

    def test_malformed_json(self):
        with self.assertRaises(ValueError):
            self.application.client.get('/text')


class AuthExceptionTestCase(BaseTestCase):

    def create_application(self):
        return Application('test', url=REMOTE_URL, auth_exception={"error": "unauthorized"})

    def setUp(self):
        super(AuthExceptionTestCase, self).setUp()

        class Car(Model):
            wheels = HasMany()

            class Meta:
                application = 'test'

        class Wheel(Model):
            class Meta:
                application = 'test'

        self.Car = Car

        @self.app.route('/cars', methods=['POST'])
        def cars():
            return jsonify({"error": "unauthorized", "message": "Log in first"}), 401

        @self.app.route('/cars/<int:id>')
        def car(id):
            return jsonify({"id": id, "error": "none"})

        @self.app.route('/cars/<int:id>/wheels')
        def wheels(id):
            return jsonify({"error": "unauthorized"}), 200

    def test_save_raises(self):
        with self.assertRaises(RemoteAuthenticationError) as cm:
            self.Car(name='Herbie').save()

        self.assertEqual(401, cm.exception.status)
        self.assertEqual('/cars', cm.exception.url)
        self.assertEqual("Log in first", cm.exception.body['message'])

    def test_association_raises(self):
        car = self.Car.find(1)
        self.assertEqual("none", car['error'])

        with self.assertRaises(RemoteAuthenticationError):
            car.wheels()
        self.assertFalse(car.wheels.is_cached())

    def test_callable_signature(self):
        self.application.auth_exception = lambda status, body: status == 401

        with self.assertRaises(RemoteAuthenticationError):
            self.Car(name='Herbie').save()
        self.assertEqual({"error": "unauthorized"}, self.Car(id=1).wheels().attributes)


class StripRootJSONTestCase(BaseTestCase):

    def setUp(self):
        super(StripRootJSONTestCase, self).setUp()

        class Car(Model):
            class Meta:
                application = 'test'

        self.Car = Car

        @self.app.route('/cars')
        def cars():
            return jsonify([{"car": {"id": 1}}, {"car": {"id": 2}}])

        @self.app.route('/cars/<int:id>')
        def car(id):
            return jsonify({"car": {"id": id, "name": "Herbie"}})

        @self.app.route('/cars', methods=['POST'])
        def create():
            return jsonify({"errors": {"name": ["can't be blank"]}}), 422

    def test_strip_any_root(self):
        self.application.strip_root_json = True

        self.assertEqual({"id": 1, "name": "Herbie"}, self.Car.find(1).attributes)
        self.assertEqual([1, 2], [car.id for car in self.Car.all()])

        car = self.Car()
        self.assertFalse(car.save())
        self.assertEqual(["can't be blank"], car.errors['name'])

    def test_strip_collection_root(self):
        @self.app.route('/fleet')
        def fleet():
            return jsonify({"cars": [{"car": {"id": 1}}, {"id": 2}]})

        self.application.strip_root_json = True
        cars = self.application.client.get('/fleet', model=self.Car)

        self.assertIsInstance(cars, Collection)
        self.assertEqual([{"id": 1}, {"id": 2}], [car.attributes for car in cars])

        self.application.strip_root_json = 'cars'
        self.assertEqual([{"car": {"id": 1}}, {"id": 2}], self.application.client.get('/fleet'))

    def test_strip_named_root(self):
        self.application.strip_root_json = 'car'
        self.assertEqual({"id": 1, "name": "Herbie"}, self.Car.find(1).attributes)

        self.application.strip_root_json = 'vehicle'
        self.assertEqual({"car": {"id": 1, "name": "Herbie"}}, self.Car.find(1).attributes)

    def test_no_stripping(self):
        self.assertEqual({"car": {"id": 1, "name": "Herbie"}}, self.Car.find(1).attributes)


class SessionTestCase(BaseTestCase):

    def test_separate_applications(self):
        other = Application('other', url='http://other.test')
        other_adapter = FlaskAdapter(self.app)
        other.connection.session.mount('http://other.test', other_adapter)

        @self.app.route('/robots/<int:id>')
        def robot(id):
            return jsonify({"id": id})

        class Robot(Model):
            class Meta:
                application = 'other'

        self.assertEqual(1, Robot.find(1).id)
        self.assertEqual([('GET', '/robots/1')], other_adapter.requests)
        self.assertRequests([])
