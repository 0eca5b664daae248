import sys

import demo_hilbert_transform

def test_demo_output(monkeypatch, capsys):
    monkeypatch.setattr(sys, 'argv', ['demo_hilbert_transform.py'])
    demo_hilbert_transform.main()
    lines = capsys.readouterr().out.splitlines()
    assert lines == [
        "Input coords = 5,10,20",
        "Hilbert coords = 10,14,27",
        "Hilbert integer = 7865 = 001 111 010 111 001",
        "Reconstructed Hilbert coords = 10,14,27",
        "Orig coords = 5,10,20",
    ]

def test_demo_plot(monkeypatch, tmp_path):
    import matplotlib
    matplotlib.use('Agg')
    path = tmp_path / "curve.png"
    monkeypatch.setattr(sys, 'argv', ['demo_hilbert_transform.py', '--coords', '1', '2', '--bits', '2', '--plot', str(path)])
    demo_hilbert_transform.main()
    assert path.exists()
