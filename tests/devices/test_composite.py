"""Tests for composite devices: compose() and MultifunctionMachine."""

from unittest.mock import MagicMock

import pytest

from officedev.devices.composite import (
    CompositeDevice,
    MultifunctionMachine,
    composite_class,
    compose,
)
from officedev.devices.contracts import Faxable, MultiFunctionDevice, Printable, Scannable
from officedev.devices.leaf import (
    FaxMachine,
    FlatbedScanner,
    MultiFunctionPrinter,
    OldFashionedPrinter,
    OrdinaryPrinter,
    PhotoCopier,
)
from officedev.domain.capabilities import Capability
from officedev.domain.document import Document
from officedev.domain.errors import DeviceErrorCode, InvalidDelegateError, MissingDelegateError
from officedev.domain.result import OperationResult


class TestCompose:
    def test_print_and_scan_from_two_devices(self, document: Document) -> None:
        printer = OrdinaryPrinter(name="p")
        scanner = FlatbedScanner(name="s")
        office = compose(printer=printer, scanner=scanner, name="office")

        assert office.print(document).ok
        assert office.scan(document).ok
        assert office.capabilities == {Capability.PRINT, Capability.SCAN}
        assert not hasattr(office, "fax")
        assert not isinstance(office, Faxable)
        assert isinstance(office, Printable)
        assert isinstance(office, Scannable)

    def test_forwarding_returns_delegate_result(self, any_document: Document) -> None:
        printer = OrdinaryPrinter(name="p")
        office = compose(printer=printer)
        assert office.print(any_document) == printer.print(any_document)

    def test_forwarding_is_transparent(self, document: Document) -> None:
        printer = OrdinaryPrinter(name="p")
        sentinel = OperationResult.success(Capability.PRINT, "elsewhere", document.id)
        printer.print = MagicMock(return_value=sentinel)  # type: ignore[method-assign]

        office = compose(printer=printer)

        assert office.print(document) is sentinel
        printer.print.assert_called_once_with(document)

    def test_delegate_failure_surfaces_unchanged(self, document: Document) -> None:
        scanner = FlatbedScanner(name="s")
        failure = OperationResult.failure(
            Capability.SCAN, "s", document.id, DeviceErrorCode.UNSUPPORTED_OPERATION, "jammed"
        )
        scanner.scan = MagicMock(return_value=failure)  # type: ignore[method-assign]

        office = compose(scanner=scanner)

        assert office.scan(document) is failure

    def test_positional_devices_fill_gaps(self, document: Document) -> None:
        legacy = OldFashionedPrinter(name="legacy")
        mfp = MultiFunctionPrinter()
        # legacy only declares print, so scan and fax come from mfp
        office = compose(legacy, mfp)
        assert office.delegates[Capability.PRINT] is legacy
        assert office.delegates[Capability.FAX] is mfp
        assert office.fax(document).device == "multi_function_printer"

    def test_advertised_capability_without_delegate(self) -> None:
        with pytest.raises(MissingDelegateError) as excinfo:
            compose(printer=OrdinaryPrinter(), advertise=[Capability.PRINT, Capability.SCAN])
        assert excinfo.value.error.code is DeviceErrorCode.MISSING_DELEGATE
        assert excinfo.value.error.detail["capabilities"] == ["scan"]

    def test_no_delegates_at_all(self) -> None:
        with pytest.raises(MissingDelegateError):
            compose()

    def test_delegate_that_cannot_serve(self) -> None:
        with pytest.raises(InvalidDelegateError) as excinfo:
            compose(faxer=OldFashionedPrinter(name="legacy"))
        assert excinfo.value.error.detail["delegate"] == "legacy"

    def test_positional_devices_contribute_union(self) -> None:
        office = compose(PhotoCopier(), FaxMachine())
        assert office.capabilities == set(Capability)
        assert isinstance(office, MultiFunctionDevice) is False
        assert isinstance(office, Faxable)

    def test_first_positional_device_wins(self) -> None:
        first = PhotoCopier(name="first")
        second = MultiFunctionPrinter(name="second")
        office = compose(first, second)
        assert office.delegates[Capability.PRINT] is first
        assert office.delegates[Capability.SCAN] is first
        assert office.delegates[Capability.FAX] is second

    def test_keyword_delegate_overrides_positional(self) -> None:
        copier = PhotoCopier(name="copier")
        scanner = FlatbedScanner(name="scanner")
        office = compose(copier, scanner=scanner)
        assert office.delegates[Capability.SCAN] is scanner
        assert office.delegates[Capability.PRINT] is copier

    def test_shared_delegate(self, document: Document) -> None:
        printer = OrdinaryPrinter(name="shared")
        a = compose(printer=printer, name="a")
        b = compose(printer=printer, scanner=FlatbedScanner(), name="b")
        assert a.delegates[Capability.PRINT] is b.delegates[Capability.PRINT]
        assert a.print(document) == b.print(document)

    def test_delegates_read_only(self) -> None:
        office = compose(printer=OrdinaryPrinter())
        with pytest.raises(TypeError):
            office.delegates[Capability.SCAN] = FlatbedScanner()  # type: ignore[index]

    def test_default_name_follows_class(self) -> None:
        assert compose(printer=OrdinaryPrinter()).name == "print_composite"
        paired = compose(printer=OrdinaryPrinter(), scanner=FlatbedScanner())
        assert paired.name == "print_scan_composite"
        assert MultifunctionMachine(OrdinaryPrinter(), FlatbedScanner()).name == (
            "multifunction_machine"
        )


class TestCompositeClass:
    def test_classes_are_cached(self) -> None:
        caps = frozenset({Capability.PRINT, Capability.FAX})
        assert composite_class(caps) is composite_class(caps)

    def test_class_name(self) -> None:
        cls = composite_class(frozenset({Capability.SCAN, Capability.PRINT}))
        assert cls.__name__ == "PrintScanComposite"
        assert issubclass(cls, CompositeDevice)

    def test_direct_construction_checks_delegates(self) -> None:
        cls = composite_class(frozenset({Capability.PRINT, Capability.SCAN}))
        with pytest.raises(MissingDelegateError):
            cls({Capability.PRINT: OrdinaryPrinter()})

    def test_direct_construction_rejects_extra_delegates(self) -> None:
        cls = composite_class(frozenset({Capability.PRINT}))
        with pytest.raises(InvalidDelegateError):
            cls({Capability.PRINT: OrdinaryPrinter(), Capability.FAX: FaxMachine()})


class TestMultifunctionMachine:
    def test_conforms_to_wide_contract(self) -> None:
        machine = MultifunctionMachine(OrdinaryPrinter(), FlatbedScanner())
        assert isinstance(machine, MultiFunctionDevice)
        assert machine.capabilities == set(Capability)

    def test_forwards_print_and_scan(self, document: Document) -> None:
        machine = MultifunctionMachine(OrdinaryPrinter(name="p"), FlatbedScanner(name="s"))
        assert machine.print(document).device == "p"
        assert machine.scan(document).device == "s"

    def test_faxes_itself_without_faxer(self, any_document: Document) -> None:
        machine = MultifunctionMachine(OrdinaryPrinter(), FlatbedScanner(), name="office")
        result = machine.fax(any_document)
        assert result.ok
        assert result.device == "office"

    def test_fax_delegate_used_when_given(self, document: Document) -> None:
        machine = MultifunctionMachine(
            OrdinaryPrinter(), FlatbedScanner(), FaxMachine(name="fax")
        )
        assert machine.fax(document).device == "fax"

    def test_missing_scanner(self) -> None:
        with pytest.raises(MissingDelegateError) as excinfo:
            MultifunctionMachine(OrdinaryPrinter(), None)
        assert excinfo.value.error.detail["capabilities"] == ["scan"]

    def test_wrong_delegate_for_scan(self) -> None:
        with pytest.raises(InvalidDelegateError):
            MultifunctionMachine(OrdinaryPrinter(), OrdinaryPrinter())

    def test_copier_can_fill_both_roles(self, document: Document) -> None:
        copier = PhotoCopier(name="copier")
        machine = MultifunctionMachine(copier, copier)
        assert machine.print(document).device == "copier"
        assert machine.scan(document).device == "copier"
